# stagecms/application/staging/promote_ai_review.py
from typing import Dict, Optional
from flask import current_app
from stagecms.extensions import db
from stagecms.application.resolution.resolve_post import resolve_post
from stagecms.domain.exceptions import NothingToPromoteError
from stagecms.domain.lifecycle.tiers import assert_promotion
from stagecms.domain.tiers import Mode, coalesce
from stagecms.models.post_module import PostModule
from stagecms.utils.jsonb import coerce_json_object
from stagecms.utils.lookup import get_post
from stagecms.utils.revisions import record_revision
from stagecms.utils.transaction import transactional
from .drafts import saved_now


def promote_ai_review_to_review(
    *,
    post_id: str,
    actor_id: Optional[int] = None,
) -> Dict[str, int]:
    """
    Move the ai-review tier into the review tier and clear it.

    Responsibilities:
    - transactional boundary (all rows or none)
    - COALESCE each staged layer down one tier
    - move staged add / delete flags
    - revision of the resulting review view
    """
    # 1️⃣ Fetch post; a field-level draft is required
    post = get_post(post_id)

    if post.ai_review_draft is None:
        raise NothingToPromoteError(
            "Post has no ai-review draft to promote",
            meta={"post_id": post_id},
        )

    assert_promotion(from_tier=Mode.AI_REVIEW, to_tier=Mode.REVIEW)

    post_modules = PostModule.query.filter_by(post_id=post.id).all()
    instances = {pm.module_instance.id: pm.module_instance for pm in post_modules}

    with transactional():
        # 2️⃣ Local instance props; shared globals are carried by the association overrides
        for instance in instances.values():
            if not instance.is_global:
                instance.review_props = coalesce(
                    instance.ai_review_props,
                    instance.review_props,
                    instance.props,
                )
            instance.ai_review_props = None

        # 3️⃣ Association overrides and staging flags
        for post_module in post_modules:
            post_module.review_overrides = coalesce(
                post_module.ai_review_overrides,
                post_module.review_overrides,
                post_module.overrides,
            )
            post_module.ai_review_overrides = None

            if post_module.ai_review_added:
                post_module.review_added = True
            post_module.ai_review_added = False

            if post_module.ai_review_deleted:
                post_module.review_deleted = True
            post_module.ai_review_deleted = False

        # 4️⃣ Field draft
        post.review_draft = merge_drafts(post.review_draft, post.ai_review_draft)
        post.ai_review_draft = None

        db.session.flush()

        # 5️⃣ Revision
        record_revision(
            post_id=post.id,
            mode=Mode.REVIEW.value,
            action="promote-ai-review-to-review",
            snapshot=resolve_post(post_id=post.id, mode=Mode.REVIEW),
            user_id=actor_id,
        )

    current_app.logger.info(
        "Promoted ai-review to review on post %s (%d modules, %d instances)",
        post_id,
        len(post_modules),
        len(instances),
    )

    return {
        "modules": len(post_modules),
        "instances": len(instances),
    }


def merge_drafts(review_draft, ai_review_draft):
    """
    {...review, ...ai_review} with nullish ai-review values skipped, so the
    promoted review view equals the ai-review view it replaces.
    """
    review = coerce_json_object(review_draft)
    ai_review = coerce_json_object(ai_review_draft)

    merged = dict(review)
    merged.update({key: value for key, value in ai_review.items() if value is not None})
    merged["module_order"] = {
        **coerce_json_object(review.get("module_order")),
        **coerce_json_object(ai_review.get("module_order")),
    }
    merged["saved_at"] = saved_now()
    return merged

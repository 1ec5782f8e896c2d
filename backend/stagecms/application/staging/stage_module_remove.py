from typing import Optional
from flask import current_app
from stagecms.extensions import db
from stagecms.application.resolution.resolve_post import resolve_post
from stagecms.domain.invariants.post_module import assert_unlocked
from stagecms.domain.tiers import Mode
from stagecms.utils.lookup import get_post_module
from stagecms.utils.revisions import record_revision
from stagecms.utils.transaction import transactional
from .drafts import touch_ai_review_draft


def stage_module_remove(
    *,
    post_module_id: str,
    actor_id: Optional[int] = None,
) -> None:
    """
    Stage removal of a module in the ai-review tier.

    The row stays; it disappears from ai-review views and is only deleted
    when the removal reaches the approved tier.
    """
    post_module = get_post_module(post_module_id)
    assert_unlocked(post_module, "remove")

    post = post_module.post

    with transactional():
        post_module.ai_review_deleted = True
        touch_ai_review_draft(post, actor_id)
        db.session.flush()

        record_revision(
            post_id=post.id,
            mode=Mode.AI_REVIEW.value,
            action="stage-module-remove",
            snapshot=resolve_post(post_id=post.id, mode=Mode.AI_REVIEW),
            user_id=actor_id,
        )

    current_app.logger.info("Staged removal of post_module %s (post %s)", post_module_id, post.id)

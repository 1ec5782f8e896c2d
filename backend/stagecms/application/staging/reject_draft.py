from typing import Dict, Optional
from flask import current_app
from stagecms.extensions import db
from stagecms.application.resolution.resolve_post import resolve_post
from stagecms.domain.exceptions import NothingToPromoteError, SchemaError
from stagecms.domain.tiers import Mode, parse_mode
from stagecms.models.post_module import PostModule
from stagecms.utils.lookup import get_post
from stagecms.utils.revisions import record_revision
from stagecms.utils.transaction import transactional

# Columns holding each draft tier
TIER_COLUMNS = {
    Mode.REVIEW: {
        "draft": "review_draft",
        "props": "review_props",
        "overrides": "review_overrides",
        "added": "review_added",
        "deleted": "review_deleted",
    },
    Mode.AI_REVIEW: {
        "draft": "ai_review_draft",
        "props": "ai_review_props",
        "overrides": "ai_review_overrides",
        "added": "ai_review_added",
        "deleted": "ai_review_deleted",
    },
}


def reject_draft(
    *,
    post_id: str,
    mode: Mode | str,
    actor_id: Optional[int] = None,
) -> Dict[str, int]:
    """
    Discard everything staged in one draft tier.

    Notes:
    - Associations added in the tier are deleted, with their local instances
    - Shared global instances are never modified
    - The revision captures the rejected view, taken before clearing
    """
    mode = parse_mode(mode)
    if mode not in TIER_COLUMNS:
        raise SchemaError("Only review and ai-review drafts can be rejected", meta={"mode": mode.value})

    columns = TIER_COLUMNS[mode]
    post = get_post(post_id)
    post_modules = PostModule.query.filter_by(post_id=post.id).all()

    if not _has_staged_content(post, post_modules, columns):
        raise NothingToPromoteError(
            f"Nothing staged in {mode.value}",
            meta={"post_id": post_id, "mode": mode.value},
        )

    snapshot = resolve_post(post_id=post.id, mode=mode)
    removed = 0

    with transactional():
        setattr(post, columns["draft"], None)

        for post_module in post_modules:
            instance = post_module.module_instance

            if getattr(post_module, columns["added"]):
                db.session.delete(post_module)
                removed += 1
                if not instance.is_global and len(instance.post_modules) <= 1:
                    db.session.delete(instance)
                continue

            setattr(post_module, columns["overrides"], None)
            setattr(post_module, columns["deleted"], False)
            if not instance.is_global:
                setattr(instance, columns["props"], None)

        record_revision(
            post_id=post.id,
            mode=mode.value,
            action=f"reject-{mode.value}",
            snapshot=snapshot,
            user_id=actor_id,
        )

    current_app.logger.info(
        "Rejected %s draft on post %s (%d staged modules removed)",
        mode.value,
        post_id,
        removed,
    )
    return {"removed_modules": removed}


def _has_staged_content(post, post_modules, columns) -> bool:
    if getattr(post, columns["draft"]) is not None:
        return True

    for post_module in post_modules:
        instance = post_module.module_instance
        if (
            getattr(post_module, columns["added"])
            or getattr(post_module, columns["deleted"])
            or getattr(post_module, columns["overrides"]) is not None
            or (not instance.is_global and getattr(instance, columns["props"]) is not None)
        ):
            return True
    return False

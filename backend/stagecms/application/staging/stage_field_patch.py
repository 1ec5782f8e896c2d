from typing import Any, Dict, Optional
from flask import current_app
from stagecms.domain.invariants.post import assert_field_patch
from stagecms.domain.tiers import Mode
from stagecms.utils.lookup import get_post
from stagecms.utils.revisions import record_revision
from stagecms.utils.transaction import transactional
from .drafts import ai_review_draft_base, saved_now


def stage_field_patch(
    *,
    post_id: str,
    patch: Dict[str, Any],
    actor_id: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Stage a field patch into the ai-review tier.

    Responsibilities:
    - Draft from review (or approved), keeping earlier ai-review edits
    - Never touch review_draft or approved columns
    - Revision snapshot of the merged draft
    """
    post = get_post(post_id)

    assert_field_patch(patch)

    merged = {
        **ai_review_draft_base(post),
        **patch,
        "saved_at": saved_now(),
        "saved_by": actor_id,
    }

    with transactional():
        post.ai_review_draft = merged

        record_revision(
            post_id=post.id,
            mode=Mode.AI_REVIEW.value,
            action="stage-field-patch",
            snapshot=merged,
            user_id=actor_id,
        )

    current_app.logger.info(
        "Staged ai-review field patch on post %s (fields: %s)",
        post_id,
        ", ".join(sorted(patch)),
    )
    return merged

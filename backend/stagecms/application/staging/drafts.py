from datetime import datetime, timezone
from typing import Any, Dict, Optional
from stagecms.utils.jsonb import coerce_json_object


def saved_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def ai_review_draft_base(post) -> Dict[str, Any]:
    """
    Starting point for the next ai-review draft.

    Drafted from the tier below (review, else the approved projection),
    with edits already staged in ai-review kept on top.
    """
    if post.review_draft is not None:
        base = coerce_json_object(post.review_draft)
    else:
        base = post.approved_projection()

    return {**base, **coerce_json_object(post.ai_review_draft)}


def touch_ai_review_draft(post, actor_id: Optional[int], **changes) -> Dict[str, Any]:
    """
    Write the ai-review draft after a module-level edit.

    Keeps the field draft in step with staged module changes so the tier
    is promotable as a whole.
    """
    draft = ai_review_draft_base(post)
    draft.update(changes)
    draft["saved_at"] = saved_now()
    draft["saved_by"] = actor_id

    post.ai_review_draft = draft
    return draft

from typing import Any, Dict, Optional
from stagecms.extensions import db
from stagecms.models.post_revision import PostRevision


def record_revision(
    *,
    post_id: str,
    mode: str,
    action: str,
    snapshot: Dict[str, Any],
    user_id: Optional[int] = None,
) -> PostRevision:
    """
    Append a revision to the current session.

    Call inside the staging transaction so a failed insert rolls the
    whole mutation back.
    """
    revision = PostRevision()
    revision.post_id = post_id
    revision.mode = mode
    revision.action = action
    revision.snapshot = snapshot
    revision.user_id = user_id

    db.session.add(revision)
    return revision

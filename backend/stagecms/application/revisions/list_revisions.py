from typing import List, Optional, Tuple
from stagecms.models.post_revision import PostRevision
from stagecms.utils.lookup import get_post
from stagecms.utils.pagination import CursorMeta, apply_cursor, paginate_cursor


def list_revisions(
    *,
    post_id: str,
    limit: int = 20,
    cursor: Optional[str] = None,
    mode: Optional[str] = None,
) -> Tuple[List[PostRevision], CursorMeta]:
    """
    Revision history for a post, newest first.

    Read-only; revisions are never updated or deleted.
    """
    post = get_post(post_id)

    query = PostRevision.query.filter(PostRevision.post_id == post.id)
    if mode:
        query = query.filter(PostRevision.mode == mode)

    query = apply_cursor(query, model=PostRevision, cursor=cursor)
    return paginate_cursor(query, model=PostRevision, limit=limit)

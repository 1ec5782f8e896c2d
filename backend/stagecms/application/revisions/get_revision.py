from stagecms.domain.exceptions import NotFoundError
from stagecms.models.post_revision import PostRevision
from stagecms.utils.lookup import get_post


def get_revision(*, post_id: str, revision_id: str) -> PostRevision:
    post = get_post(post_id)

    revision = PostRevision.query.filter_by(id=revision_id, post_id=post.id).first()
    if not revision:
        raise NotFoundError(
            "Revision not found",
            meta={"post_id": post_id, "revision_id": revision_id},
        )
    return revision

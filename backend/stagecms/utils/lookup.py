from stagecms.domain.exceptions import NotFoundError
from stagecms.models.post import Post
from stagecms.models.post_module import PostModule


def get_post(post_id):
    """Live (not soft-deleted) post, or NotFoundError."""
    post = Post.query.filter(Post.id == post_id, Post.live()).first()
    if not post:
        raise NotFoundError("Post not found", meta={"post_id": post_id})
    return post


def get_post_module(post_module_id):
    """Association on a live post, or NotFoundError."""
    post_module = (
        PostModule.query
        .join(Post, Post.id == PostModule.post_id)
        .filter(PostModule.id == post_module_id, Post.live())
        .first()
    )
    if not post_module:
        raise NotFoundError("Post module not found", meta={"post_module_id": post_module_id})
    return post_module

from stagecms.extensions import db
from stagecms.models.post_module import PostModule


def next_order_index(post_id):
    """
    Order index that appends after every association on the post.
    """
    max_order = db.session.query(db.func.max(PostModule.order_index))\
        .filter_by(post_id=post_id)\
        .scalar()

    return 0 if max_order is None else max_order + 1


def render_sort_key(order_index, post_module):
    """(order_index, created_at, id): stable tie-break for rendering."""
    return (order_index, *post_module.creation_key)

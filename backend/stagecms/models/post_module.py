from stagecms.extensions import db
from .base import BaseModel


class PostModule(BaseModel):
    """
    Joins a post to a module instance.

    Carries ordering, lock state and the per-post override layers.
    """

    __tablename__ = "post_modules"

    post_id = db.Column(db.String(36), db.ForeignKey("posts.id"), nullable=False, index=True)
    module_id = db.Column(db.String(36), db.ForeignKey("module_instances.id"), nullable=False, index=True)

    order_index = db.Column(db.Integer, nullable=False, default=0)
    locked = db.Column(db.Boolean, nullable=False, default=False)

    overrides = db.Column(db.JSON(none_as_null=True), nullable=True)
    review_overrides = db.Column(db.JSON(none_as_null=True), nullable=True)
    ai_review_overrides = db.Column(db.JSON(none_as_null=True), nullable=True)

    review_added = db.Column(db.Boolean, nullable=False, default=False)
    review_deleted = db.Column(db.Boolean, nullable=False, default=False)
    ai_review_added = db.Column(db.Boolean, nullable=False, default=False)
    ai_review_deleted = db.Column(db.Boolean, nullable=False, default=False)

    post = db.relationship("Post", back_populates="post_modules")
    module_instance = db.relationship("ModuleInstance", back_populates="post_modules")

    __table_args__ = (
        db.Index("idx_post_module_order", "post_id", "order_index", "created_at", "id"),
    )

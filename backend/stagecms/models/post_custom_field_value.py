from stagecms.extensions import db
from .base import BaseModel


class PostCustomFieldValue(BaseModel):
    __tablename__ = "post_custom_field_values"

    post_id = db.Column(db.String(36), db.ForeignKey("posts.id"), nullable=False, index=True)
    field_slug = db.Column(db.String(100), nullable=False)
    value = db.Column(db.JSON, nullable=True)

    __table_args__ = (
        db.UniqueConstraint("post_id", "field_slug", name="uq_post_custom_field"),
    )

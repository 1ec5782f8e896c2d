from stagecms.extensions import db
from .base import BaseModel
from .soft_delete_mixin import SoftDeleteMixin


# Approved columns, in the order they are projected into drafts and views.
APPROVED_FIELDS = (
    "type",
    "locale",
    "slug",
    "title",
    "excerpt",
    "status",
    "parent_id",
    "order_index",
    "meta_title",
    "meta_description",
    "canonical_url",
    "robots_json",
    "jsonld_overrides",
    "featured_media_id",
    "translation_of_id",
)


class Post(BaseModel, SoftDeleteMixin):
    __tablename__ = "posts"

    # Approved fields: written only by create / publish paths
    type = db.Column(db.String(50), nullable=False, index=True)
    locale = db.Column(db.String(10), nullable=False, default="en")
    slug = db.Column(db.String(200), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    excerpt = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    parent_id = db.Column(db.String(36), db.ForeignKey("posts.id"), nullable=True)
    order_index = db.Column(db.Integer, nullable=False, default=0)
    meta_title = db.Column(db.String(255), nullable=True)
    meta_description = db.Column(db.Text, nullable=True)
    canonical_url = db.Column(db.String(512), nullable=True)
    robots_json = db.Column(db.JSON(none_as_null=True), nullable=True)
    jsonld_overrides = db.Column(db.JSON(none_as_null=True), nullable=True)
    featured_media_id = db.Column(db.String(36), nullable=True)
    translation_of_id = db.Column(db.String(36), db.ForeignKey("posts.id"), nullable=True)

    # Staging tiers: field patches relative to the approved baseline
    review_draft = db.Column(db.JSON(none_as_null=True), nullable=True)
    ai_review_draft = db.Column(db.JSON(none_as_null=True), nullable=True)

    __table_args__ = (
        db.UniqueConstraint("type", "locale", "slug", name="uq_post_slug_per_type_locale"),
    )

    post_modules = db.relationship(
        "PostModule",
        back_populates="post",
        cascade="all, delete-orphan",
    )

    def approved_projection(self):
        return {field: getattr(self, field) for field in APPROVED_FIELDS}

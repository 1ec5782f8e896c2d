from stagecms.extensions import db
from stagecms.domain.module_scope import GlobalScope, LocalScope
from .base import BaseModel


class ModuleInstance(BaseModel):
    __tablename__ = "module_instances"

    type = db.Column(db.String(100), nullable=False, index=True)  # catalog key
    scope = db.Column(db.String(10), nullable=False, default="local")  # local | global

    global_slug = db.Column(db.String(200), unique=True, nullable=True)
    global_label = db.Column(db.String(255), nullable=True)

    props = db.Column(db.JSON, nullable=False, default=dict)
    review_props = db.Column(db.JSON(none_as_null=True), nullable=True)
    ai_review_props = db.Column(db.JSON(none_as_null=True), nullable=True)

    post_modules = db.relationship("PostModule", back_populates="module_instance")

    __table_args__ = (
        db.CheckConstraint("scope IN ('local', 'global')", name="ck_module_instance_scope"),
        db.CheckConstraint(
            "scope = 'local' OR global_slug IS NOT NULL",
            name="ck_module_instance_global_slug",
        ),
    )

    @property
    def scope_variant(self):
        if self.scope == "global":
            return GlobalScope(slug=self.global_slug, label=self.global_label)
        return LocalScope()

    @property
    def is_global(self):
        return self.scope == "global"

# stagecms/models/post_revision.py
from stagecms.extensions import db
from .base import BaseModel
from sqlalchemy import event


class PostRevision(BaseModel):
    __tablename__ = "post_revisions"

    __table_args__ = (
        db.Index("ix_post_revision_cursor", "post_id", "created_at", "id"),
    )

    post_id = db.Column(db.String(36), db.ForeignKey("posts.id"), nullable=False, index=True)
    mode = db.Column(db.String(20), nullable=False)  # ai-review | review | source
    action = db.Column(db.String(50), nullable=False)
    snapshot = db.Column(db.JSON, nullable=False)
    user_id = db.Column(db.Integer, nullable=True)


@event.listens_for(PostRevision, 'before_update')
@event.listens_for(PostRevision, 'before_delete')
def prevent_revision_mutation(mapper, connection, target):
    raise RuntimeError("Post revisions are immutable")

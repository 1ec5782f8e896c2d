from datetime import datetime, timezone
import uuid
from stagecms.extensions import db


def local_time_now():
    # Naive UTC: DateTime columns round-trip without tzinfo
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id():
    return str(uuid.uuid4())


class BaseModel(db.Model):
    """
    UUID primary key plus per-row timestamps.

    `created_at` is evaluated per insert; together with `id` it is the
    stable tie-break for anything ordered by position.
    """

    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=new_id, index=True)
    created_at = db.Column(db.DateTime, default=local_time_now, index=True)
    updated_at = db.Column(db.DateTime, default=local_time_now, onupdate=local_time_now, index=True)

    @property
    def creation_key(self):
        return (self.created_at, self.id)

    def __repr__(self):
        return f"<{type(self).__name__} {self.id}>"

from stagecms.extensions import db
from .base import local_time_now


class SoftDeleteMixin:
    """Rows are hidden from every read path once `deleted_at` is set."""

    deleted_at = db.Column(db.DateTime, nullable=True)

    @classmethod
    def live(cls):
        return cls.deleted_at.is_(None)

    def soft_delete(self):
        self.deleted_at = local_time_now()

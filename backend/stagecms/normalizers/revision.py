# stagecms/normalizers/revision.py
from __future__ import annotations

from typing import Dict, Any
from stagecms.models.post_revision import PostRevision


def normalize_revision(revision: PostRevision, include_snapshot: bool = False) -> Dict[str, Any]:
    """
    Normalizes a PostRevision into API-safe JSON.

    Listings omit the snapshot; single-revision reads include it.
    """

    if not revision:
        raise ValueError("PostRevision cannot be None")

    data = {
        "id": revision.id,
        "post_id": revision.post_id,
        "mode": revision.mode,
        "action": revision.action,
        "user_id": revision.user_id,
        "created_at": revision.created_at.isoformat(),
    }

    if include_snapshot:
        data["snapshot"] = revision.snapshot

    return data

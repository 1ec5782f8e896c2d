from datetime import timezone
from dateutil.parser import parse
from flask import request
from werkzeug.exceptions import BadRequest, Conflict


def as_utc(ts):
    # Stored timestamps are naive UTC
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def enforce_optimistic_lock(post):
    """
    Honour If-Unmodified-Since on writes to a post's draft.

    A stale client gets 409; no header means last write wins.
    """
    header = request.headers.get("If-Unmodified-Since")
    if not header:
        return

    try:
        client_ts = as_utc(parse(header))
    except (ValueError, OverflowError):
        raise BadRequest("Invalid If-Unmodified-Since header")

    # HTTP dates carry whole seconds
    last_modified = as_utc(post.updated_at).replace(microsecond=0)
    if last_modified > client_ts:
        raise Conflict(f"Post {post.id} has been modified since {header}")

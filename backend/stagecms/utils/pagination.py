# stagecms/utils/pagination.py
from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple, TypedDict, Type, Any

from sqlalchemy.orm import Query
from sqlalchemy.sql import or_, and_

from stagecms.domain.exceptions import SchemaError


class CursorMeta(TypedDict):
    """
    Cursor pagination metadata returned by list_* operations.
    """
    has_more: bool
    next_cursor: Optional[str]


def encode_cursor(created_at: datetime, row_id: Any) -> str:
    """
    Encode a cursor from the sort key of the last row served.

    Format: ISO8601|<id>
    """
    if not isinstance(created_at, datetime) or row_id is None:
        raise ValueError("created_at and row_id are required to encode cursor")

    return f"{created_at.isoformat()}|{row_id}"


def decode_cursor(cursor: str) -> Tuple[datetime, str]:
    if not cursor or "|" not in cursor:
        raise SchemaError("Invalid cursor format", meta={"cursor": cursor})

    ts_str, row_id = cursor.split("|", 1)
    try:
        return datetime.fromisoformat(ts_str), row_id
    except ValueError as exc:
        raise SchemaError("Invalid cursor format", meta={"cursor": cursor}) from exc


def apply_cursor(
    query: Query,
    *,
    model: Type[Any],
    cursor: Optional[str],
) -> Query:
    """
    Restrict `query` to rows strictly after the cursor.

    Ordering contract (MANDATORY):
      ORDER BY created_at DESC, id DESC
    """
    if not cursor:
        return query

    cursor_ts, cursor_id = decode_cursor(cursor)

    return query.filter(
        or_(
            model.created_at < cursor_ts,
            and_(
                model.created_at == cursor_ts,
                model.id < cursor_id,
            ),
        )
    )


def paginate_cursor(
    query: Query,
    *,
    model: Type[Any],
    limit: int,
) -> tuple[list[Any], CursorMeta]:
    """
    Execute a cursor-paginated query.

    Fetches limit + 1 rows to detect continuation, then trims.
    """
    if limit <= 0:
        raise SchemaError("Limit must be greater than zero", meta={"limit": limit})

    rows = (
        query.order_by(model.created_at.desc(), model.id.desc())
        .limit(limit + 1)
        .all()
    )

    has_more = len(rows) > limit
    items = rows[:limit]

    next_cursor: Optional[str] = None
    if items and has_more:
        last = items[-1]
        next_cursor = encode_cursor(last.created_at, last.id)

    return items, {
        "has_more": has_more,
        "next_cursor": next_cursor,
    }

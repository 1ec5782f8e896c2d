from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .exceptions import SchemaError


class Mode(str, Enum):
    """
    Staging tiers, ordered from most durable to least durable.

    source     approved / live content
    review     human-pending draft
    ai-review  agent-proposed draft, drafted on top of review
    """

    SOURCE = "source"
    REVIEW = "review"
    AI_REVIEW = "ai-review"


# Priority order used by every layered read: highest tier first.
TIER_PRIORITY: Tuple[Mode, ...] = (Mode.AI_REVIEW, Mode.REVIEW, Mode.SOURCE)


def parse_mode(value: Any) -> Mode:
    try:
        return Mode(value)
    except ValueError:
        raise SchemaError(
            f"Unknown mode: {value!r}",
            meta={"mode": value, "allowed": [m.value for m in Mode]},
        ) from None


def visible_tiers(mode: Mode) -> Tuple[Mode, ...]:
    """Tiers at or below `mode`, highest priority first."""
    index = TIER_PRIORITY.index(mode)
    return TIER_PRIORITY[index:]


def coalesce(*values: Any) -> Any:
    """First non-null value wins."""
    for value in values:
        if value is not None:
            return value
    return None


def layered(mode: Mode, *, ai_review: Any, review: Any, source: Any) -> Any:
    """
    COALESCE across the tiers visible from `mode`.

    layered(Mode.REVIEW, ...) ignores `ai_review` entirely.
    """
    by_tier = {
        Mode.AI_REVIEW: ai_review,
        Mode.REVIEW: review,
        Mode.SOURCE: source,
    }
    return coalesce(*(by_tier[tier] for tier in visible_tiers(mode)))


def deep_merge(base: Optional[Dict[str, Any]], override: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Merge `override` into a copy of `base`.

    Nested dicts merge key by key; lists and scalars are replaced.
    """
    out: Dict[str, Any] = dict(base or {})
    for key, value in (override or {}).items():
        current = out.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            out[key] = deep_merge(current, value)
        else:
            out[key] = value
    return out

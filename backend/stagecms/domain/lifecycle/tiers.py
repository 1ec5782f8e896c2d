from typing import Set
from stagecms.domain.tiers import Mode

# Explicit allowed promotions between tiers
ALLOWED_PROMOTIONS: dict[Mode, Set[Mode]] = {
    Mode.AI_REVIEW: {Mode.REVIEW},
    Mode.REVIEW: {Mode.SOURCE},  # review → approved lives in the publish path
    Mode.SOURCE: set(),
}

def assert_promotion(*, from_tier: Mode, to_tier: Mode) -> None:
    """
    Guards tier promotions.
    Content only ever moves one tier toward approved.
    """
    allowed = ALLOWED_PROMOTIONS.get(from_tier, set())

    if to_tier not in allowed:
        raise ValueError(
            f"Illegal promotion: {from_tier.value} → {to_tier.value}"
        )

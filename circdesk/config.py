"""
Business rules for the circulation desk.

Every number the desk decides with lives on ``CirculationPolicy`` so a test
(or another branch library) can swap in its own rules. Per-type loan limits
and loan periods belong to the patron and live in ``domain``.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import FrozenSet, Optional, Tuple

from .domain import BookType

# (first day, last day or None for open-ended, daily rate)
FineTier = Tuple[int, Optional[int], Decimal]


@dataclass(frozen=True)
class CirculationPolicy:
    overdue_limit: int = 3
    fine_limit: Decimal = Decimal("10.00")
    max_fine: Decimal = Decimal("25.00")
    fine_tiers: Tuple[FineTier, ...] = (
        (1, 7, Decimal("0.25")),
        (8, 14, Decimal("0.50")),
        (15, None, Decimal("1.00")),
    )
    double_rate_types: FrozenSet[BookType] = field(
        default_factory=lambda: frozenset({BookType.REFERENCE, BookType.TEXTBOOK})
    )
    # success turns into a warning once the patron is this close to the limit
    warning_margin: int = 2


DEFAULT_POLICY = CirculationPolicy()

# returned by return_book instead of a fine when nothing could be returned
RETURN_FAILED = Decimal("-1.00")

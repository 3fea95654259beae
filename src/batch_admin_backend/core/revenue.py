'''
Revenue attribution.

Two independent percentages of a batch's revenue are shown per batch (a
teacher share and a platform share). They are not a partition of the revenue.
A separate rate applies to the completed sales behind a teacher's students
when computing the teacher's persisted total earnings. All rates come from
settings.
'''
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, NamedTuple, Optional

from ..common.config import settings

CENT = Decimal("0.01")


def round2(value: Decimal | int | float | str) -> Decimal:
    """Rounds half-up to two decimal places."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class RevenueShares(NamedTuple):
    teacher_share: Decimal
    platform_share: Decimal


def allocate(
    revenue: Decimal | int | float | str | None,
    teacher_rate: Optional[Decimal] = None,
    platform_rate: Optional[Decimal] = None
) -> RevenueShares:
    """
    Splits a batch's revenue into the teacher share and the platform share.
    """
    teacher_rate = settings.BATCH_TEACHER_SHARE_RATE if teacher_rate is None else Decimal(teacher_rate)
    platform_rate = settings.BATCH_PLATFORM_SHARE_RATE if platform_rate is None else Decimal(platform_rate)
    # rates apply to the exact revenue; only the shares are rounded
    amount = revenue if isinstance(revenue, Decimal) else Decimal(str(revenue or 0))
    return RevenueShares(
        teacher_share=round2(amount * teacher_rate),
        platform_share=round2(amount * platform_rate),
    )


def teacher_earnings_from_sales(
    amounts: Iterable[Decimal | int | float | str],
    rate: Optional[Decimal] = None
) -> Decimal:
    """
    Total earnings for a teacher given the amounts of the completed sales
    made by their students.
    """
    rate = settings.TEACHER_EARNINGS_RATE if rate is None else Decimal(rate)
    total = sum((Decimal(str(a)) for a in amounts), Decimal("0"))
    return round2(total * rate)

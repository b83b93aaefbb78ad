from collections import defaultdict
from datetime import date
from typing import Iterable, Sequence

from pydantic import BaseModel

from alphacard.domain.models import Card, Transaction


class MonthlyTotal(BaseModel):
    month: str
    spending: float


def _same_month(day: date, reference: date) -> bool:
    return day.year == reference.year and day.month == reference.month


def _shift_month(reference: date, months_back: int) -> date:
    index = reference.year * 12 + (reference.month - 1) - months_back
    return date(index // 12, index % 12 + 1, 1)


def category_spending(transactions: Iterable[Transaction], month: date | None = None) -> dict[str, float]:
    totals: dict[str, float] = defaultdict(float)
    for tx in transactions:
        if month is not None and not _same_month(tx.transaction_date, month):
            continue
        totals[tx.category] += tx.amount
    return dict(totals)


def month_spending(transactions: Iterable[Transaction], today: date) -> float:
    return sum(tx.amount for tx in transactions if _same_month(tx.transaction_date, today))


def monthly_trends(transactions: Sequence[Transaction], today: date, months: int = 6) -> list[MonthlyTotal]:
    """Spending per calendar month, oldest first, ending with the current month."""
    series: list[MonthlyTotal] = []
    for months_back in range(months - 1, -1, -1):
        start = _shift_month(today, months_back)
        series.append(
            MonthlyTotal(
                month=start.strftime("%b"),
                spending=month_spending(transactions, start),
            )
        )
    return series


def total_rewards(cards: Iterable[Card]) -> float:
    return sum(card.reward_balance for card in cards)


def top_category(spending: dict[str, float]) -> str | None:
    if not spending:
        return None
    return max(spending.items(), key=lambda item: item[1])[0]

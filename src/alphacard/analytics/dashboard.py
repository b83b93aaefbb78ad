from datetime import date
from typing import Sequence

from pydantic import BaseModel, Field

from alphacard.analytics.spending import (
    MonthlyTotal,
    category_spending,
    month_spending,
    monthly_trends,
    top_category,
    total_rewards,
)
from alphacard.domain.models import Card, Transaction
from alphacard.engine.evaluator import card_efficiency
from alphacard.engine.selectors import best_card_for_category, most_efficient_card


class DashboardSummary(BaseModel):
    card_count: int
    total_rewards: float
    this_month_spending: float
    category_spending: dict[str, float] = Field(default_factory=dict)
    top_category: str | None = None
    best_card: Card | None = None
    best_card_efficiency: int | None = None
    best_card_for_top_category: Card | None = None
    monthly_trends: list[MonthlyTotal] = Field(default_factory=list)


def build_dashboard(cards: Sequence[Card], transactions: Sequence[Transaction], today: date) -> DashboardSummary:
    spending = category_spending(transactions, month=today)
    top = top_category(spending)
    best = most_efficient_card(cards)

    return DashboardSummary(
        card_count=len(cards),
        total_rewards=total_rewards(cards),
        this_month_spending=month_spending(transactions, today),
        category_spending=spending,
        top_category=top,
        best_card=best,
        best_card_efficiency=card_efficiency(best) if best else None,
        best_card_for_top_category=best_card_for_category(cards, top) if top else None,
        monthly_trends=monthly_trends(transactions, today),
    )

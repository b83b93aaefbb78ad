import logging
from datetime import date

from alphacard.analytics.dashboard import DashboardSummary, build_dashboard
from alphacard.analytics.spending import category_spending
from alphacard.domain.models import SpendingCategory
from alphacard.engine.evaluator import card_efficiency, category_rate
from alphacard.engine.selectors import best_card_for_category, rank_cards
from alphacard.repository.stores import CardStore, TransactionStore
from alphacard.schemas.requests import AdvisorCard, AdvisorRequest, AdvisorTransaction, RecommendRequest
from alphacard.schemas.responses import (
    CardEfficiency,
    CategoryBestResponse,
    EfficiencyResponse,
    RecommendResponse,
)

logger = logging.getLogger(__name__)

ADVISOR_TRANSACTION_LIMIT = 20


class RecommendationOrchestrator:
    def __init__(self, card_store: CardStore, transaction_store: TransactionStore):
        self.card_store = card_store
        self.transaction_store = transaction_store

    def recommend(self, user_id: str, request: RecommendRequest) -> RecommendResponse:
        cards = self.card_store.list_for_user(user_id)
        ranked = rank_cards(cards, request.category, request.amount)

        if not ranked:
            logger.info("No cards to rank for user %s", user_id)

        return RecommendResponse(
            category=request.category,
            amount=request.amount,
            recommendation=ranked[0] if ranked else None,
            ranked_cards=ranked,
        )

    def best_for_category(self, user_id: str, category: SpendingCategory) -> CategoryBestResponse:
        card = best_card_for_category(self.card_store.list_for_user(user_id), category)
        return CategoryBestResponse(
            category=category,
            card=card,
            reward_rate=category_rate(card, category, 0) if card else 0,
        )

    def efficiency(self, user_id: str) -> EfficiencyResponse:
        scored = [
            CardEfficiency(card=card, efficiency=card_efficiency(card))
            for card in self.card_store.list_for_user(user_id)
        ]
        scored.sort(key=lambda item: item.efficiency, reverse=True)
        return EfficiencyResponse(cards=scored)

    def dashboard(self, user_id: str, today: date) -> DashboardSummary:
        return build_dashboard(
            self.card_store.list_for_user(user_id),
            self.transaction_store.list_for_user(user_id),
            today,
        )

    def with_portfolio(self, user_id: str, request: AdvisorRequest) -> AdvisorRequest:
        """Fill whatever portfolio context the caller left out from the stores."""
        updates: dict = {}

        if request.cards is None:
            updates["cards"] = [
                AdvisorCard.model_validate(card.model_dump(mode="json"))
                for card in self.card_store.list_for_user(user_id)
            ]

        if request.transactions is None or request.recent_spending is None:
            transactions = self.transaction_store.list_for_user(user_id)
            if request.transactions is None:
                updates["transactions"] = [
                    AdvisorTransaction.model_validate(tx.model_dump(mode="json"))
                    for tx in transactions[:ADVISOR_TRANSACTION_LIMIT]
                ]
            if request.recent_spending is None:
                updates["recent_spending"] = category_spending(transactions)

        return request.model_copy(update=updates)

from alphacard.agents.orchestrator import RecommendationOrchestrator
from alphacard.domain.models import Benefit, Card, CardRecommendation, Offer, SpendingCategory, Transaction
from alphacard.engine.evaluator import card_efficiency, score_card
from alphacard.engine.selectors import best_card_for_category, get_best_card, most_efficient_card, rank_cards
from alphacard.repository.stores import BenefitStore, CardStore, OfferStore, TransactionStore
from alphacard.schemas.requests import AdvisorRequest, RecommendRequest

__all__ = [
    "AdvisorRequest",
    "Benefit",
    "BenefitStore",
    "Card",
    "CardRecommendation",
    "CardStore",
    "Offer",
    "OfferStore",
    "RecommendRequest",
    "RecommendationOrchestrator",
    "SpendingCategory",
    "Transaction",
    "TransactionStore",
    "best_card_for_category",
    "card_efficiency",
    "get_best_card",
    "most_efficient_card",
    "rank_cards",
    "score_card",
]

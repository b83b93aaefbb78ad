from pydantic import BaseModel

from alphacard.domain.models import Benefit, Card, CardRecommendation, Offer, SpendingCategory, Transaction


class RecommendResponse(BaseModel):
    category: SpendingCategory
    amount: float
    recommendation: CardRecommendation | None
    ranked_cards: list[CardRecommendation]


class CardListResponse(BaseModel):
    success: bool = True
    data: list[Card]
    count: int
    user_id: str


class CategoryBestResponse(BaseModel):
    category: SpendingCategory
    card: Card | None
    reward_rate: float


class CardEfficiency(BaseModel):
    card: Card
    efficiency: int


class EfficiencyResponse(BaseModel):
    cards: list[CardEfficiency]


class TransactionListResponse(BaseModel):
    data: list[Transaction]
    count: int


class OfferListResponse(BaseModel):
    activated: list[Offer]
    available: list[Offer]


class BenefitListResponse(BaseModel):
    active_bonuses: list[Benefit]
    completed_bonuses: list[Benefit]
    other: list[Benefit]

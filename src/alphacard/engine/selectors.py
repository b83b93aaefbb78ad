from typing import Sequence

from alphacard.domain.models import Card, CardRecommendation, SpendingCategory
from alphacard.engine.evaluator import card_efficiency, category_rate, score_card


def rank_cards(
    cards: Sequence[Card], category: SpendingCategory | str, amount: float
) -> list[CardRecommendation]:
    recommendations = [score_card(card, category, amount) for card in cards]
    # stable: earlier cards win ties
    recommendations.sort(key=lambda item: item.score, reverse=True)
    return recommendations


def get_best_card(
    cards: Sequence[Card], category: SpendingCategory | str, amount: float
) -> CardRecommendation | None:
    if not cards:
        return None
    return rank_cards(cards, category, amount)[0]


def best_card_for_category(cards: Sequence[Card], category: SpendingCategory | str) -> Card | None:
    if not cards:
        return None

    best = cards[0]
    for card in cards[1:]:
        if category_rate(card, category, 0) > category_rate(best, category, 0):
            best = card
    return best


def most_efficient_card(cards: Sequence[Card]) -> Card | None:
    if not cards:
        return None

    best = cards[0]
    for card in cards[1:]:
        if card_efficiency(card) > card_efficiency(best):
            best = card
    return best

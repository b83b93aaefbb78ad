import math

from alphacard.domain.models import Card, CardRecommendation, SpendingCategory

LOW_UTILIZATION = 0.3
SMALL_PURCHASE = 100
DEFAULT_REWARD_RATE = 1.0
MAX_FEE_PENALTY = 5.0


def category_key(category: SpendingCategory | str) -> str:
    if isinstance(category, SpendingCategory):
        return category.value
    return str(category)


def format_number(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)


def category_rate(card: Card, category: SpendingCategory | str, default: float) -> float:
    """Category rate, then the card's "Other" rate, then ``default``.

    A configured rate of zero counts as unset.
    """
    rates = card.reward_rates or {}
    return rates.get(category_key(category)) or rates.get(SpendingCategory.OTHER.value) or default


def utilization(card: Card) -> float:
    if not card.credit_limit:
        return 0.0
    return card.balance / card.credit_limit


def score_card(card: Card, category: SpendingCategory | str, amount: float) -> CardRecommendation:
    name = category_key(category)
    rate = category_rate(card, name, DEFAULT_REWARD_RATE)
    used = utilization(card)

    score = rate * 20
    if used < LOW_UTILIZATION:
        score += 10
    if amount < SMALL_PURCHASE and card.annual_fee > 0:
        score -= min(MAX_FEE_PENALTY, card.annual_fee / 100)
    if name.lower() in card.name.lower():
        score += 15

    reason = f"{format_number(rate)}% rewards on {name}"
    if used < LOW_UTILIZATION:
        reason = f"Low utilization card with {format_number(rate)}% on {name}"

    return CardRecommendation(
        card=card,
        score=min(100.0, max(0.0, score)),
        reason=reason,
        reward_rate=rate,
    )


def _utilization_score(used: float) -> int:
    if used < 0.3:
        return 100
    if used < 0.5:
        return 80
    if used < 0.7:
        return 60
    return 40


def card_efficiency(card: Card) -> int:
    rates = list((card.reward_rates or {}).values())
    avg_rate = sum(rates) / max(1, len(rates))
    fee_impact = max(0.0, 100 - card.annual_fee / 5) if card.annual_fee > 0 else 100.0

    total = (avg_rate * 10 + _utilization_score(utilization(card)) + fee_impact) / 3
    if not math.isfinite(total):
        # rates near the float limit overflow the sum
        return 0
    # half-up, not banker's rounding
    return int(math.floor(total + 0.5))

from typing import Sequence

from alphacard.engine.evaluator import format_number
from alphacard.schemas.requests import AdvisorCard, AdvisorRequest, AdvisorTransaction

MAX_CONTEXT_TRANSACTIONS = 10

SYSTEM_PROMPT = """You are AlphaCard AI, an expert financial assistant specializing in credit card optimization and rewards maximization. Your role is to:

1. **Analyze Spending Patterns**: Review user's transaction history to identify trends, habits, and opportunities for optimization.

2. **Maximize Rewards**: Recommend which card to use for specific purchases based on reward rates, active offers, and category bonuses.

3. **Monitor Points & Rewards**: Track reward balances across cards and suggest the best redemption strategies.

4. **Optimize Card Portfolio**: Advise on card utilization, annual fee value, and whether cards are earning their keep.

5. **Financial Guidance**: Provide tips on credit health, utilization ratios, and strategic spending.

**Communication Style:**
- Be concise but thorough
- Use specific numbers when available
- Prioritize actionable insights
- Be friendly but professional
- Format responses with clear sections when appropriate

**Context**: You have access to the user's card portfolio, transactions, and rewards data which will be provided with each query. Use this data to give personalized, data-driven advice."""


def _card_line(card: AdvisorCard) -> str:
    line = (
        f"- {card.name} ({card.issuer}): "
        f"Balance ${format_number(card.balance or 0)}/{format_number(card.credit_limit or 0)} limit, "
        f"Annual Fee ${format_number(card.annual_fee or 0)}, "
        f"Rewards: {format_number(card.reward_balance or 0)} {card.reward_type or 'points'}"
    )
    rates = ", ".join(f"{category}: {format_number(rate)}%" for category, rate in card.reward_rates.items())
    if rates:
        line += f", Rates: {rates}"
    return line


def build_data_context(
    cards: Sequence[AdvisorCard] | None,
    transactions: Sequence[AdvisorTransaction] | None,
    recent_spending: dict[str, float] | None,
) -> str:
    context = ""

    if cards:
        context += "\n\n**USER'S CARD PORTFOLIO:**\n"
        context += "".join(f"{_card_line(card)}\n" for card in cards)

    if transactions:
        context += f"\n**RECENT TRANSACTIONS (last {MAX_CONTEXT_TRANSACTIONS}):**\n"
        for tx in transactions[:MAX_CONTEXT_TRANSACTIONS]:
            context += f"- {tx.merchant}: ${format_number(tx.amount)} ({tx.category}) on {tx.transaction_date}\n"

    # an empty summary still gets its heading
    if recent_spending is not None:
        context += "\n**SPENDING SUMMARY:**\n"
        for category, amount in recent_spending.items():
            context += f"- {category}: ${format_number(amount)}\n"

    return context


def build_messages(request: AdvisorRequest) -> list[dict[str, str]]:
    user_message = request.message + build_data_context(
        request.cards, request.transactions, request.recent_spending
    )
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_message},
    ]

import asyncio
import logging

from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from alphacard.advisor.client import AdvisorClient, AdvisorError
from alphacard.agents.orchestrator import RecommendationOrchestrator
from alphacard.config import settings
from alphacard.domain.models import SPENDING_CATEGORIES, SpendingCategory
from alphacard.engine.evaluator import format_number
from alphacard.log import configure_logging
from alphacard.repository.stores import CardStore, TransactionStore
from alphacard.schemas.requests import AdvisorRequest, RecommendRequest
from alphacard.schemas.responses import EfficiencyResponse, RecommendResponse

logger = logging.getLogger(__name__)

USAGE = f"Usage: /best <category> <amount>\nCategories: {', '.join(SPENDING_CATEGORIES)}"

orchestrator = RecommendationOrchestrator(
    CardStore(settings.card_store_file),
    TransactionStore(settings.transaction_store_file),
)
advisor = AdvisorClient.from_settings(settings)


def parse_best_args(args: list[str]) -> RecommendRequest | None:
    if len(args) != 2:
        return None

    lookup = {category.lower(): category for category in SPENDING_CATEGORIES}
    category = lookup.get(args[0].lower())
    if category is None:
        return None

    try:
        amount = float(args[1].lstrip("$"))
    except ValueError:
        return None

    return RecommendRequest(category=SpendingCategory(category), amount=amount)


def format_recommendation(payload: RecommendResponse) -> str:
    best = payload.recommendation
    if best is None:
        return "You have no cards yet. Add one first."

    lines = [
        f"Best card: {best.card.name}",
        f"Score: {best.score:.1f}/100",
        f"Why: {best.reason}",
        f"Purchase: ${format_number(payload.amount)} / {payload.category.value}",
    ]
    runners_up = payload.ranked_cards[1:3]
    if runners_up:
        lines.append("Runners-up:")
        lines.extend([f"- {item.card.name} ({item.score:.1f})" for item in runners_up])
    return "\n".join(lines)


def format_efficiency(payload: EfficiencyResponse) -> str:
    if not payload.cards:
        return "You have no cards yet."
    return "\n".join(f"{item.card.name}: efficiency {item.efficiency}" for item in payload.cards)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(
        "Ask me anything about your cards, or use /best Dining 45 to pick a card for a purchase."
    )


async def best(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    request = parse_best_args(context.args or [])
    if request is None:
        await update.message.reply_text(USAGE)
        return

    result = orchestrator.recommend(settings.telegram_user_id, request)
    await update.message.reply_text(format_recommendation(result))


async def cards(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(format_efficiency(orchestrator.efficiency(settings.telegram_user_id)))


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    text = (update.message.text or "").strip()
    if not text:
        return

    request = orchestrator.with_portfolio(settings.telegram_user_id, AdvisorRequest(message=text))
    try:
        reply = await asyncio.to_thread(advisor.complete, request)
    except AdvisorError as exc:
        logger.warning("Advisor failed for telegram message: %s", exc)
        await update.message.reply_text(str(exc))
        return

    await update.message.reply_text(reply or "The advisor had nothing to say. Try rephrasing.")


def main() -> None:
    if not settings.telegram_bot_token:
        raise ValueError("TELEGRAM_BOT_TOKEN is required.")
    if not settings.telegram_user_id:
        raise ValueError("TELEGRAM_USER_ID is required.")

    configure_logging(settings.log_level)
    app = Application.builder().token(settings.telegram_bot_token).build()
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("best", best))
    app.add_handler(CommandHandler("cards", cards))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))

    app.run_polling()


if __name__ == "__main__":
    main()

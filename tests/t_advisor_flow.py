from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

from alphacard import AdvisorRequest, CardStore, RecommendationOrchestrator, RecommendRequest, SpendingCategory, TransactionStore
from alphacard.advisor.client import AdvisorClient, AdvisorError
from alphacard.config import Settings

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SAMPLE_CARDS = PROJECT_ROOT / "data" / "store" / "cards.json"
SAMPLE_USER = "demo-user"

ADVISOR_QUESTION = "I'm having dinner out tonight for about $50. Which card should I use and why?"


def t_recommend_then_ask_advisor() -> None:
    load_dotenv(PROJECT_ROOT / ".env")
    settings = Settings()

    orchestrator = RecommendationOrchestrator(
        CardStore(str(SAMPLE_CARDS)),
        TransactionStore(str(PROJECT_ROOT / "data" / "store" / "transactions.json")),
    )
    result = orchestrator.recommend(SAMPLE_USER, RecommendRequest(category=SpendingCategory.DINING, amount=50))

    print("=== Step 1: Heuristic Recommendation ===")
    for item in result.ranked_cards:
        print(f"{item.card.name}: score={item.score:.2f} reason={item.reason}")
    print()

    print("=== Step 2: Advisor Reply (streamed) ===")
    client = AdvisorClient.from_settings(settings)
    request = orchestrator.with_portfolio(SAMPLE_USER, AdvisorRequest(message=ADVISOR_QUESTION))
    try:
        for delta in client.open_stream(request):
            print(delta, end="", flush=True)
    except AdvisorError as exc:
        print(f"FAIL ({exc.status_code}): {exc}")
        raise
    print()


if __name__ == "__main__":
    t_recommend_then_ask_advisor()

import logging
from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from alphacard.advisor.client import AdvisorClient
from alphacard.agents.orchestrator import RecommendationOrchestrator
from alphacard.config import Settings, settings
from alphacard.repository.stores import BenefitStore, CardStore, OfferStore, TransactionStore

logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    return settings


@lru_cache
def get_card_store() -> CardStore:
    return CardStore(settings.card_store_file)


@lru_cache
def get_transaction_store() -> TransactionStore:
    return TransactionStore(settings.transaction_store_file)


@lru_cache
def get_offer_store() -> OfferStore:
    return OfferStore(settings.offer_store_file)


@lru_cache
def get_benefit_store() -> BenefitStore:
    return BenefitStore(settings.benefit_store_file)


@lru_cache
def get_advisor_client() -> AdvisorClient:
    return AdvisorClient.from_settings(settings)


def get_orchestrator(
    card_store: CardStore = Depends(get_card_store),
    transaction_store: TransactionStore = Depends(get_transaction_store),
) -> RecommendationOrchestrator:
    return RecommendationOrchestrator(card_store, transaction_store)


def get_current_user_id(
    authorization: str | None = Header(default=None),
    app_settings: Settings = Depends(get_settings),
) -> str:
    if not authorization:
        logger.info("No authorization header provided")
        raise HTTPException(status_code=401, detail="Authorization header required")

    token = authorization.removeprefix("Bearer ").strip()
    user_id = app_settings.api_tokens.get(token)
    if not user_id:
        logger.info("Rejected unknown bearer token")
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return user_id

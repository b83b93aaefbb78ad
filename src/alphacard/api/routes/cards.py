import logging

from fastapi import APIRouter, Depends, HTTPException

from alphacard.api.deps import get_card_store, get_current_user_id
from alphacard.domain.models import Card
from alphacard.repository.json_store import RecordNotFoundError
from alphacard.repository.stores import CardStore
from alphacard.schemas.requests import CardCreate, CardUpdate
from alphacard.schemas.responses import CardListResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cards"])


@router.get("/cards", response_model=CardListResponse)
def list_cards(
    user_id: str = Depends(get_current_user_id),
    store: CardStore = Depends(get_card_store),
) -> CardListResponse:
    cards = store.list_for_user(user_id)
    logger.info("Returning %d cards for user %s", len(cards), user_id)
    return CardListResponse(data=cards, count=len(cards), user_id=user_id)


@router.post("/cards", response_model=Card, status_code=201)
def add_card(
    payload: CardCreate,
    user_id: str = Depends(get_current_user_id),
    store: CardStore = Depends(get_card_store),
) -> Card:
    return store.create(user_id, payload.model_dump())


@router.get("/cards/{card_id}", response_model=Card)
def get_card(
    card_id: str,
    user_id: str = Depends(get_current_user_id),
    store: CardStore = Depends(get_card_store),
) -> Card:
    try:
        return store.get(user_id, card_id)
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Card not found") from exc


@router.patch("/cards/{card_id}", response_model=Card)
def update_card(
    card_id: str,
    payload: CardUpdate,
    user_id: str = Depends(get_current_user_id),
    store: CardStore = Depends(get_card_store),
) -> Card:
    try:
        return store.update(user_id, card_id, payload.model_dump(exclude_unset=True))
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Card not found") from exc


@router.delete("/cards/{card_id}")
def delete_card(
    card_id: str,
    user_id: str = Depends(get_current_user_id),
    store: CardStore = Depends(get_card_store),
) -> dict[str, bool]:
    if not store.delete(user_id, card_id):
        raise HTTPException(status_code=404, detail="Card not found")
    return {"ok": True}

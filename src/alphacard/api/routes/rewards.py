from fastapi import APIRouter, Depends, HTTPException

from alphacard.api.deps import get_benefit_store, get_current_user_id, get_offer_store
from alphacard.domain.models import Benefit, Offer
from alphacard.repository.json_store import RecordNotFoundError
from alphacard.repository.stores import BenefitStore, OfferStore
from alphacard.schemas.requests import BenefitCreate, BenefitUpdate, OfferCreate, OfferUpdate
from alphacard.schemas.responses import BenefitListResponse, OfferListResponse

router = APIRouter(tags=["rewards"])


@router.get("/offers", response_model=OfferListResponse)
def list_offers(
    user_id: str = Depends(get_current_user_id),
    store: OfferStore = Depends(get_offer_store),
) -> OfferListResponse:
    offers = store.list_for_user(user_id)
    return OfferListResponse(
        activated=[offer for offer in offers if offer.is_activated],
        available=[offer for offer in offers if not offer.is_activated],
    )


@router.post("/offers", response_model=Offer, status_code=201)
def add_offer(
    payload: OfferCreate,
    user_id: str = Depends(get_current_user_id),
    store: OfferStore = Depends(get_offer_store),
) -> Offer:
    return store.create(user_id, payload.model_dump())


@router.patch("/offers/{offer_id}", response_model=Offer)
def toggle_offer(
    offer_id: str,
    payload: OfferUpdate,
    user_id: str = Depends(get_current_user_id),
    store: OfferStore = Depends(get_offer_store),
) -> Offer:
    try:
        return store.update(user_id, offer_id, payload.model_dump())
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Offer not found") from exc


@router.get("/benefits", response_model=BenefitListResponse)
def list_benefits(
    user_id: str = Depends(get_current_user_id),
    store: BenefitStore = Depends(get_benefit_store),
) -> BenefitListResponse:
    benefits = store.list_for_user(user_id)
    return BenefitListResponse(
        active_bonuses=[benefit for benefit in benefits if benefit.is_in_progress],
        completed_bonuses=[benefit for benefit in benefits if benefit.is_completed],
        other=[benefit for benefit in benefits if benefit.target <= 0],
    )


@router.post("/benefits", response_model=Benefit, status_code=201)
def add_benefit(
    payload: BenefitCreate,
    user_id: str = Depends(get_current_user_id),
    store: BenefitStore = Depends(get_benefit_store),
) -> Benefit:
    return store.create(user_id, payload.model_dump())


@router.patch("/benefits/{benefit_id}", response_model=Benefit)
def update_benefit(
    benefit_id: str,
    payload: BenefitUpdate,
    user_id: str = Depends(get_current_user_id),
    store: BenefitStore = Depends(get_benefit_store),
) -> Benefit:
    try:
        return store.update(user_id, benefit_id, payload.model_dump(exclude_unset=True))
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Benefit not found") from exc

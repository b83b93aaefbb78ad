from fastapi import APIRouter, Depends

from alphacard.api.deps import get_current_user_id, get_transaction_store
from alphacard.domain.models import Transaction
from alphacard.repository.stores import TransactionStore
from alphacard.schemas.requests import TransactionCreate
from alphacard.schemas.responses import TransactionListResponse

router = APIRouter(tags=["transactions"])


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(
    user_id: str = Depends(get_current_user_id),
    store: TransactionStore = Depends(get_transaction_store),
) -> TransactionListResponse:
    transactions = store.list_for_user(user_id)
    return TransactionListResponse(data=transactions, count=len(transactions))


@router.post("/transactions", response_model=Transaction, status_code=201)
def add_transaction(
    payload: TransactionCreate,
    user_id: str = Depends(get_current_user_id),
    store: TransactionStore = Depends(get_transaction_store),
) -> Transaction:
    return store.create(user_id, payload.model_dump(mode="json"))

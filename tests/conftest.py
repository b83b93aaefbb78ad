import pytest
from fastapi.testclient import TestClient

from alphacard.api import deps
from alphacard.api.app import app
from alphacard.config import Settings
from alphacard.repository.stores import BenefitStore, CardStore, OfferStore, TransactionStore

TOKEN = "test-token"
USER_ID = "user-1"


@pytest.fixture
def stores(tmp_path) -> dict:
    return {
        "cards": CardStore(str(tmp_path / "cards.json")),
        "transactions": TransactionStore(str(tmp_path / "transactions.json")),
        "offers": OfferStore(str(tmp_path / "offers.json")),
        "benefits": BenefitStore(str(tmp_path / "benefits.json")),
    }


@pytest.fixture
def client(stores):
    test_settings = Settings(api_tokens={TOKEN: USER_ID, "other-token": "user-2"})
    app.dependency_overrides[deps.get_settings] = lambda: test_settings
    app.dependency_overrides[deps.get_card_store] = lambda: stores["cards"]
    app.dependency_overrides[deps.get_transaction_store] = lambda: stores["transactions"]
    app.dependency_overrides[deps.get_offer_store] = lambda: stores["offers"]
    app.dependency_overrides[deps.get_benefit_store] = lambda: stores["benefits"]

    with TestClient(app) as test_client:
        test_client.headers.update({"Authorization": f"Bearer {TOKEN}"})
        yield test_client

    app.dependency_overrides.clear()

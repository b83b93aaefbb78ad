from datetime import date

import pytest

from alphacard.repository.json_store import RecordNotFoundError
from alphacard.repository.stores import BenefitStore, CardStore, TransactionStore


@pytest.fixture
def card_store(tmp_path) -> CardStore:
    return CardStore(str(tmp_path / "cards.json"))


def test_missing_file_reads_empty(card_store) -> None:
    assert card_store.list_for_user("u1") == []


def test_card_lifecycle(card_store) -> None:
    created = card_store.create("u1", {"name": "Sapphire", "credit_limit": 5000, "reward_rates": {"Travel": 3}})

    assert created.id
    assert created.user_id == "u1"
    assert card_store.get("u1", created.id).name == "Sapphire"

    updated = card_store.update("u1", created.id, {"balance": 1200})
    assert updated.balance == 1200
    assert updated.reward_rates == {"Travel": 3}
    assert updated.updated_at >= created.updated_at
    assert updated.created_at == created.created_at

    assert card_store.delete("u1", created.id) is True
    assert card_store.delete("u1", created.id) is False
    assert card_store.list_for_user("u1") == []


def test_cards_are_scoped_to_their_owner(card_store) -> None:
    mine = card_store.create("u1", {"name": "Mine"})
    card_store.create("u2", {"name": "Theirs"})

    assert [card.name for card in card_store.list_for_user("u1")] == ["Mine"]
    with pytest.raises(RecordNotFoundError):
        card_store.get("u2", mine.id)
    with pytest.raises(RecordNotFoundError):
        card_store.update("u2", mine.id, {"name": "Stolen"})
    assert card_store.delete("u2", mine.id) is False


def test_cards_list_newest_first(card_store) -> None:
    first = card_store.create("u1", {"name": "First"})
    second = card_store.create("u1", {"name": "Second"})
    card_store.update("u1", second.id, {"created_at": "2020-01-01T00:00:00Z"})

    assert [card.id for card in card_store.list_for_user("u1")] == [first.id, second.id]


def test_transactions_sorted_by_date(tmp_path) -> None:
    store = TransactionStore(str(tmp_path / "transactions.json"))
    store.create("u1", {"merchant": "Old", "amount": 5, "transaction_date": date(2024, 1, 1)})
    store.create("u1", {"merchant": "New", "amount": 7, "transaction_date": date(2025, 1, 1)})

    assert [tx.merchant for tx in store.list_for_user("u1")] == ["New", "Old"]


def test_benefit_progress(tmp_path) -> None:
    store = BenefitStore(str(tmp_path / "benefits.json"))
    bonus = store.create("u1", {"name": "Welcome bonus", "target": 4000, "progress": 1500, "reward_amount": 60000})

    assert bonus.is_in_progress
    assert store.list_for_user("u1") == [bonus]

    store.update("u1", bonus.id, {"progress": 4200})
    assert store.get("u1", bonus.id).is_completed

from datetime import date
from typing import Iterator

from alphacard.advisor.client import AdvisorClient, AdvisorRateLimitedError
from alphacard.api import deps
from alphacard.api.app import app
from alphacard.schemas.requests import AdvisorRequest

USER_ID = "user-1"


class ScriptedAdvisor(AdvisorClient):
    def __init__(self, replies: list[str] | None = None, error: Exception | None = None):
        super().__init__(api_key="k", base_url="https://gateway.test/v1", model="m")
        self.replies = replies or []
        self.error = error
        self.requests: list[AdvisorRequest] = []

    def open_stream(self, request: AdvisorRequest) -> Iterator[str]:
        self.requests.append(request)
        if self.error:
            raise self.error
        return iter(self.replies)


def add_card(client, **fields) -> dict:
    payload = {"name": "Plain", "balance": 500, "credit_limit": 1000}
    payload.update(fields)
    response = client.post("/cards", json=payload)
    assert response.status_code == 201
    return response.json()


def test_health_needs_no_token(client) -> None:
    del client.headers["Authorization"]

    assert client.get("/health").json() == {"status": "ok"}


def test_missing_and_unknown_tokens_are_rejected(client) -> None:
    del client.headers["Authorization"]
    missing = client.get("/cards")
    unknown = client.get("/cards", headers={"Authorization": "Bearer nope"})

    assert missing.status_code == 401
    assert missing.json() == {"error": "Authorization header required"}
    assert unknown.status_code == 401
    assert unknown.json() == {"error": "Invalid or expired token"}


def test_get_cards_envelope(client) -> None:
    add_card(client, name="Travel Card", reward_rates={"Travel": 3})

    body = client.get("/cards").json()

    assert body["success"] is True
    assert body["count"] == 1
    assert body["user_id"] == USER_ID
    assert body["data"][0]["name"] == "Travel Card"


def test_card_update_and_delete(client) -> None:
    card = add_card(client)

    patched = client.patch(f"/cards/{card['id']}", json={"balance": 50, "reward_rates": {"Gas": 3}})
    assert patched.status_code == 200
    assert patched.json()["balance"] == 50
    assert patched.json()["name"] == "Plain"

    assert client.delete(f"/cards/{card['id']}").json() == {"ok": True}
    missing = client.delete(f"/cards/{card['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Card not found"}
    assert client.patch("/cards/unknown", json={"balance": 1}).status_code == 404


def test_negative_balance_is_rejected(client) -> None:
    assert client.post("/cards", json={"name": "Bad", "balance": -5}).status_code == 422


def test_cards_are_private(client) -> None:
    card = add_card(client)

    other = client.get("/cards", headers={"Authorization": "Bearer other-token"}).json()
    assert other["count"] == 0
    assert client.delete(f"/cards/{card['id']}", headers={"Authorization": "Bearer other-token"}).status_code == 404


def test_recommend_worked_example(client) -> None:
    add_card(client, name="Travel Card", reward_rates={"Travel": 3}, balance=100, annual_fee=0)
    add_card(client, name="Dining Card", reward_rates={"Dining": 4}, balance=800, annual_fee=95)

    body = client.post("/recommend", json={"category": "Dining", "amount": 50}).json()

    assert body["recommendation"]["card"]["name"] == "Dining Card"
    assert body["recommendation"]["reason"] == "4% rewards on Dining"
    assert round(body["recommendation"]["score"], 2) == 94.05
    assert [item["card"]["name"] for item in body["ranked_cards"]] == ["Dining Card", "Travel Card"]


def test_recommend_empty_wallet(client) -> None:
    body = client.post("/recommend", json={"category": "Gas", "amount": 20}).json()

    assert body["recommendation"] is None
    assert body["ranked_cards"] == []


def test_recommend_rejects_unknown_category(client) -> None:
    assert client.post("/recommend", json={"category": "Crypto", "amount": 20}).status_code == 422


def test_best_card_for_category_and_efficiency(client) -> None:
    add_card(client, name="Grocer", reward_rates={"Groceries": 6}, balance=0)
    add_card(client, name="Flat", reward_rates={"Other": 2}, annual_fee=550)

    best = client.get("/cards/best/Groceries").json()
    assert best["card"]["name"] == "Grocer"
    assert best["reward_rate"] == 6

    ranked = client.get("/cards/efficiency").json()["cards"]
    assert [item["card"]["name"] for item in ranked] == ["Grocer", "Flat"]
    assert ranked[0]["efficiency"] == 87


def test_best_card_for_category_empty(client) -> None:
    body = client.get("/cards/best/Travel").json()

    assert body["card"] is None
    assert body["reward_rate"] == 0


def test_transactions_and_dashboard(client) -> None:
    add_card(client, name="Dining Card", reward_rates={"Dining": 4}, reward_balance=1200, balance=0)
    today = date.today().isoformat()
    for merchant, category, amount in [("Chipotle", "Dining", 25), ("Shell", "Gas", 40), ("Nobu", "Dining", 90)]:
        response = client.post(
            "/transactions",
            json={"merchant": merchant, "category": category, "amount": amount, "transaction_date": today},
        )
        assert response.status_code == 201

    assert client.get("/transactions").json()["count"] == 3

    dashboard = client.get("/dashboard").json()
    assert dashboard["total_rewards"] == 1200
    assert dashboard["this_month_spending"] == 155
    assert dashboard["top_category"] == "Dining"
    assert dashboard["best_card_for_top_category"]["name"] == "Dining Card"
    assert dashboard["monthly_trends"][-1]["spending"] == 155


def test_offers_split_by_activation(client) -> None:
    offer = client.post("/offers", json={"merchant": "Starbucks", "reward_rate": 10}).json()
    client.post("/offers", json={"merchant": "Uber", "is_activated": True})

    listing = client.get("/offers").json()
    assert [o["merchant"] for o in listing["activated"]] == ["Uber"]
    assert [o["merchant"] for o in listing["available"]] == ["Starbucks"]

    client.patch(f"/offers/{offer['id']}", json={"is_activated": True})
    assert len(client.get("/offers").json()["activated"]) == 2


def test_benefits_progress(client) -> None:
    bonus = client.post("/benefits", json={"name": "Sign-up bonus", "target": 3000, "progress": 500}).json()
    client.post("/benefits", json={"name": "Lounge access"})

    listing = client.get("/benefits").json()
    assert [b["name"] for b in listing["active_bonuses"]] == ["Sign-up bonus"]
    assert [b["name"] for b in listing["other"]] == ["Lounge access"]

    client.patch(f"/benefits/{bonus['id']}", json={"progress": 3000})
    listing = client.get("/benefits").json()
    assert listing["active_bonuses"] == []
    assert [b["name"] for b in listing["completed_bonuses"]] == ["Sign-up bonus"]


def test_advisor_streams_sse_with_stored_portfolio(client) -> None:
    add_card(client, name="Dining Card", reward_rates={"Dining": 4})
    advisor = ScriptedAdvisor(replies=["Use the ", "Dining Card."])
    app.dependency_overrides[deps.get_advisor_client] = lambda: advisor

    response = client.post("/advisor", json={"message": "Dinner tonight?"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    lines = [line for line in response.text.split("\n") if line]
    assert lines[0] == 'data: {"choices": [{"delta": {"content": "Use the "}}]}'
    assert lines[-1] == "data: [DONE]"
    sent = advisor.requests[0]
    assert [card.name for card in sent.cards] == ["Dining Card"]
    assert sent.transactions == []
    assert sent.recent_spending == {}


def test_advisor_keeps_client_supplied_context(client) -> None:
    add_card(client, name="Stored Card")
    advisor = ScriptedAdvisor(replies=["ok"])
    app.dependency_overrides[deps.get_advisor_client] = lambda: advisor

    client.post("/advisor", json={"message": "hi", "cards": [{"name": "Posted Card"}], "recentSpending": {"Gas": 5}})

    assert [card.name for card in advisor.requests[0].cards] == ["Posted Card"]
    assert advisor.requests[0].recent_spending == {"Gas": 5}


def test_advisor_rate_limit_maps_to_429(client) -> None:
    app.dependency_overrides[deps.get_advisor_client] = lambda: ScriptedAdvisor(error=AdvisorRateLimitedError())

    response = client.post("/advisor", json={"message": "hi"})

    assert response.status_code == 429
    assert response.json() == {"error": "Rate limit exceeded. Please try again in a moment."}


def test_advisor_requires_message(client) -> None:
    app.dependency_overrides[deps.get_advisor_client] = lambda: ScriptedAdvisor()

    assert client.post("/advisor", json={"message": ""}).status_code == 422


def test_get_single_card(client) -> None:
    card = add_card(client, name="Solo")

    assert client.get(f"/cards/{card['id']}").json()["name"] == "Solo"
    assert client.get(f"/cards/{card['id']}", headers={"Authorization": "Bearer other-token"}).status_code == 404
    assert client.get("/cards/efficiency").status_code == 200


def test_non_finite_card_numbers_are_rejected(client) -> None:
    card = add_card(client)

    assert client.post("/cards", json={"name": "Bad", "reward_rates": {"Dining": "NaN"}}).status_code == 422
    assert client.post("/cards", json={"name": "Bad", "annual_fee": "Infinity"}).status_code == 422
    assert client.patch(f"/cards/{card['id']}", json={"reward_rates": {"Dining": "inf"}}).status_code == 422
    assert client.get("/cards").json()["count"] == 1


def test_stored_non_finite_card_keeps_reads_working(client, stores) -> None:
    stores["cards"].create(USER_ID, {"name": "Odd", "annual_fee": "inf", "reward_rates": {"Dining": "nan", "Gas": 3}})

    efficiency = client.get("/cards/efficiency")
    assert efficiency.status_code == 200
    assert efficiency.json()["cards"][0]["card"]["reward_rates"] == {"Gas": 3.0}
    assert client.get("/dashboard").status_code == 200
    assert client.post("/recommend", json={"category": "Dining", "amount": 20}).status_code == 200

import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SpendingCategory(str, Enum):
    DINING = "Dining"
    TRAVEL = "Travel"
    GROCERIES = "Groceries"
    GAS = "Gas"
    ENTERTAINMENT = "Entertainment"
    OTHER = "Other"


SPENDING_CATEGORIES = [category.value for category in SpendingCategory]


def _as_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def coerce_rate_map(value: Any) -> dict[str, float]:
    """Drop anything that is not a finite numeric rate; a non-mapping becomes empty."""
    if not isinstance(value, dict):
        return {}
    rates: dict[str, float] = {}
    for key, raw in value.items():
        if isinstance(raw, bool):
            continue
        try:
            rate = float(raw)
        except (TypeError, ValueError):
            continue
        if math.isfinite(rate):
            rates[str(key)] = rate
    return rates


class Card(BaseModel):
    id: str
    user_id: str
    name: str
    issuer: str = ""
    network: str = ""
    last_four: str | None = None
    balance: float = 0
    credit_limit: float = 0
    annual_fee: float = 0
    reward_type: str = "points"
    reward_balance: float = 0
    reward_rates: dict[str, float] = Field(default_factory=dict)
    color: str = "#6B7280"
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("balance", "credit_limit", "annual_fee", "reward_balance", mode="before")
    @classmethod
    def _numeric(cls, value: Any) -> float:
        return _as_number(value)

    @field_validator("reward_rates", mode="before")
    @classmethod
    def _rates(cls, value: Any) -> dict[str, float]:
        return coerce_rate_map(value)


class Transaction(BaseModel):
    id: str
    user_id: str
    card_id: str | None = None
    merchant: str
    category: str = SpendingCategory.OTHER.value
    amount: float = 0
    rewards_earned: float = 0
    transaction_date: date
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("amount", "rewards_earned", mode="before")
    @classmethod
    def _numeric(cls, value: Any) -> float:
        return _as_number(value)


class Offer(BaseModel):
    id: str
    user_id: str
    card_id: str | None = None
    merchant: str
    description: str | None = None
    multiplier: float = 1
    reward_rate: float = 0
    expires_at: datetime | None = None
    is_activated: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class Benefit(BaseModel):
    id: str
    user_id: str
    card_id: str | None = None
    name: str
    description: str | None = None
    reward_amount: float = 0
    progress: float = 0
    target: float = 0
    expires_at: datetime | None = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_completed(self) -> bool:
        return self.target > 0 and self.progress >= self.target

    @property
    def is_in_progress(self) -> bool:
        return self.target > 0 and self.progress < self.target


class CardRecommendation(BaseModel):
    card: Card
    score: float
    reason: str
    reward_rate: float

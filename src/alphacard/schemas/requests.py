from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from alphacard.domain.models import SpendingCategory, coerce_rate_map


class RecommendRequest(BaseModel):
    category: SpendingCategory
    amount: float


class CardCreate(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    issuer: str = ""
    network: str = ""
    last_four: str | None = None
    balance: float = Field(default=0, ge=0)
    credit_limit: float = Field(default=0, ge=0)
    annual_fee: float = 0
    reward_type: str = "points"
    reward_balance: float = 0
    reward_rates: dict[str, float] = Field(default_factory=dict)
    color: str = "#6B7280"


class CardUpdate(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: str | None = None
    issuer: str | None = None
    network: str | None = None
    last_four: str | None = None
    balance: float | None = Field(default=None, ge=0)
    credit_limit: float | None = Field(default=None, ge=0)
    annual_fee: float | None = None
    reward_type: str | None = None
    reward_balance: float | None = None
    reward_rates: dict[str, float] | None = None
    color: str | None = None


class TransactionCreate(BaseModel):
    card_id: str | None = None
    merchant: str
    category: SpendingCategory = SpendingCategory.OTHER
    amount: float
    rewards_earned: float = 0
    transaction_date: date


class OfferCreate(BaseModel):
    card_id: str | None = None
    merchant: str
    description: str | None = None
    multiplier: float = 1
    reward_rate: float = 0
    expires_at: datetime | None = None
    is_activated: bool = False


class OfferUpdate(BaseModel):
    is_activated: bool


class BenefitCreate(BaseModel):
    card_id: str | None = None
    name: str
    description: str | None = None
    reward_amount: float = 0
    progress: float = 0
    target: float = 0
    expires_at: datetime | None = None
    is_active: bool = True


class BenefitUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    reward_amount: float | None = None
    progress: float | None = None
    target: float | None = None
    expires_at: datetime | None = None
    is_active: bool | None = None


class AdvisorCard(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    issuer: str = ""
    balance: float | None = None
    credit_limit: float | None = None
    annual_fee: float | None = None
    reward_type: str | None = None
    reward_balance: float | None = None
    reward_rates: dict[str, float] = Field(default_factory=dict)

    @field_validator("reward_rates", mode="before")
    @classmethod
    def _rates(cls, value: Any) -> dict[str, float]:
        return coerce_rate_map(value)


class AdvisorTransaction(BaseModel):
    model_config = ConfigDict(extra="ignore")

    merchant: str = ""
    category: str = ""
    amount: float = 0
    transaction_date: str = ""


class AdvisorRequest(BaseModel):
    message: str = Field(min_length=1)
    cards: list[AdvisorCard] | None = None
    transactions: list[AdvisorTransaction] | None = None
    recent_spending: dict[str, float] | None = Field(default=None, alias="recentSpending")

    model_config = ConfigDict(populate_by_name=True)

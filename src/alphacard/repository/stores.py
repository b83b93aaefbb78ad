from alphacard.domain.models import Benefit, Card, Offer, Transaction
from alphacard.repository.json_store import JsonRecordStore


class CardStore(JsonRecordStore[Card]):
    model = Card


class TransactionStore(JsonRecordStore[Transaction]):
    model = Transaction
    sort_field = "transaction_date"


class OfferStore(JsonRecordStore[Offer]):
    model = Offer


class BenefitStore(JsonRecordStore[Benefit]):
    model = Benefit

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from alphacard.domain.models import utcnow

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class RecordNotFoundError(KeyError):
    pass


class JsonRecordStore(Generic[RecordT]):
    """A list of user-owned records kept in a single JSON file."""

    model: type[RecordT]
    sort_field = "created_at"

    def __init__(self, store_file: str):
        self.store_file = Path(store_file)
        self._lock = threading.Lock()

    def _read_all(self) -> list[RecordT]:
        if not self.store_file.exists():
            return []

        with self.store_file.open("r", encoding="utf-8") as fh:
            data = json.load(fh)

        return [self.model.model_validate(item) for item in data]

    def _write_all(self, records: list[RecordT]) -> None:
        self.store_file.parent.mkdir(parents=True, exist_ok=True)
        tmp_file = self.store_file.with_suffix(self.store_file.suffix + ".tmp")
        with tmp_file.open("w", encoding="utf-8") as fh:
            json.dump([record.model_dump(mode="json") for record in records], fh, ensure_ascii=False, indent=2)
        tmp_file.replace(self.store_file)

    def list_for_user(self, user_id: str) -> list[RecordT]:
        records = [record for record in self._read_all() if record.user_id == user_id]
        records.sort(key=lambda record: getattr(record, self.sort_field), reverse=True)
        return records

    def get(self, user_id: str, record_id: str) -> RecordT:
        for record in self._read_all():
            if record.id == record_id and record.user_id == user_id:
                return record
        raise RecordNotFoundError(record_id)

    def create(self, user_id: str, fields: dict[str, Any]) -> RecordT:
        now = utcnow()
        payload = {**fields, "id": str(uuid.uuid4()), "user_id": user_id, "created_at": now}
        if "updated_at" in self.model.model_fields:
            payload["updated_at"] = now
        record = self.model.model_validate(payload)

        with self._lock:
            records = self._read_all()
            records.append(record)
            self._write_all(records)

        logger.info("Created %s %s for user %s", self.model.__name__, record.id, user_id)
        return record

    def update(self, user_id: str, record_id: str, changes: dict[str, Any]) -> RecordT:
        with self._lock:
            records = self._read_all()
            for index, record in enumerate(records):
                if record.id != record_id or record.user_id != user_id:
                    continue
                payload = {**record.model_dump(), **changes, "id": record.id, "user_id": user_id}
                if "updated_at" in self.model.model_fields:
                    payload["updated_at"] = utcnow()
                updated = self.model.model_validate(payload)
                records[index] = updated
                self._write_all(records)
                return updated
        raise RecordNotFoundError(record_id)

    def delete(self, user_id: str, record_id: str) -> bool:
        with self._lock:
            records = self._read_all()
            kept = [r for r in records if not (r.id == record_id and r.user_id == user_id)]
            if len(kept) == len(records):
                return False
            self._write_all(kept)

        logger.info("Deleted %s %s for user %s", self.model.__name__, record_id, user_id)
        return True

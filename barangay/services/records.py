"""
Plain record collaborators: residents, emergency contacts, complaints and
announcements. Each is a single-collection CRUD wrapper over the document
store with required-field checks and no other business rules.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, List

from barangay.core.errors import RecordNotFound, ValidationError
from barangay.db import DocumentStore, DuplicateKeyError

logger = logging.getLogger(__name__)


def normalize_timestamp(value: str | None) -> str:
    """
    Returns value as a UTC ISO-8601 timestamp, or the current time when empty.
    Naive values are taken as UTC.
    """
    if not value:
        return datetime.now(timezone.utc).isoformat()

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Date must be an ISO-8601 timestamp: {value}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).isoformat()


class RecordService:
    collection = ""
    label = "Record"
    required: tuple = ()

    def __init__(self, db: DocumentStore):
        self.db = db

    def _validate(self, data: dict) -> None:
        missing = [field for field in self.required if not data.get(field)]
        if missing:
            raise ValidationError(f"{self.label} requires: {', '.join(missing)}")

    def _new_id(self, data: dict) -> str:
        return data.get("id") or str(uuid.uuid4())

    def _prepare(self, data: dict) -> dict:
        return data

    def create(self, data: dict) -> dict:
        self._validate(data)
        doc = self._prepare(dict(data))
        doc["id"] = self._new_id(doc)
        try:
            saved = self.db.insert(self.collection, doc["id"], doc)
        except DuplicateKeyError:
            raise ValidationError(f"{self.label} id exists")
        logger.info(f"{self.label} created: id={doc['id']}")
        return saved

    def create_many(self, items: Iterable[dict]) -> List[dict]:
        items = list(items)
        for data in items:
            self._validate(data)
        return [self.create(data) for data in items]

    def list(self) -> List[dict]:
        return self.db.find(self.collection)

    def get(self, record_id: str) -> dict:
        doc = self.db.get(self.collection, record_id)
        if doc is None:
            raise RecordNotFound(f"{self.label} not found")
        return doc

    def update(self, record_id: str, changes: dict) -> dict:
        changes = {k: v for k, v in changes.items() if k != "id"}
        doc = self.db.update(self.collection, record_id, changes)
        if doc is None:
            raise RecordNotFound(f"{self.label} not found")
        logger.info(f"{self.label} updated: id={record_id}")
        return doc

    def delete(self, record_id: str) -> dict:
        doc = self.db.delete(self.collection, record_id)
        if doc is None:
            raise RecordNotFound(f"{self.label} not found")
        logger.info(f"{self.label} deleted: id={record_id}")
        return doc


class ResidentService(RecordService):
    collection = "residents"
    label = "Resident"
    required = ("firstName", "lastName")

    def _new_id(self, data: dict) -> str:
        # Residents always get a server-assigned id
        return str(uuid.uuid4())


class EmergencyContactService(RecordService):
    collection = "emergency_contacts"
    label = "Emergency contact"
    required = ("name", "phone")


class ComplaintService(RecordService):
    collection = "complaints"
    label = "Complaint"
    required = ("name", "message")

    def _prepare(self, data: dict) -> dict:
        data.setdefault("status", "pending")
        if not data.get("date"):
            data["date"] = datetime.now(timezone.utc).date().isoformat()
        return data

    def update_status(self, record_id: str, status: str) -> dict:
        if not status:
            raise ValidationError("Complaint status required")
        return self.update(record_id, {"status": status})


class AnnouncementService(RecordService):
    collection = "announcements"
    label = "Announcement"
    required = ("title",)

    def _prepare(self, data: dict) -> dict:
        data["date"] = normalize_timestamp(data.get("date"))
        return data

    def list(self) -> List[dict]:
        # Newest first
        return sorted(super().list(), key=lambda doc: datetime.fromisoformat(doc["date"]), reverse=True)

    def recent(self, limit: int = 5) -> List[dict]:
        return self.list()[:limit]

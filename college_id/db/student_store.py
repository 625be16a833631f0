from typing import Any, Dict, List, Optional

from bson.errors import InvalidDocument
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from college_id.utils.errors import ConflictError, StorageError
from college_id.utils.logging import get_logger

logger = get_logger()

UNIQUE_FIELDS = ("roll", "uniqueCode")
RECENT_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


def conflicting_field(exc: DuplicateKeyError) -> Optional[str]:
    """Name the unique field a duplicate-key error was raised for, if known"""
    details = exc.details or {}
    for key in ("keyPattern", "keyValue"):
        value = details.get(key)
        if isinstance(value, dict) and value:
            return next(iter(value))

    message = str(exc)
    for field in UNIQUE_FIELDS:
        if f"{field}_1" in message or f"{{ {field}:" in message:
            return field
    return None


class StudentStore:
    """Access to the students collection.

    Blocking pymongo calls; async callers should push them onto a worker
    thread.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def ensure_indexes(self) -> None:
        try:
            for field in UNIQUE_FIELDS:
                self.collection.create_index([(field, ASCENDING)], unique=True)
            self.collection.create_index([("createdAt", DESCENDING)])
        except PyMongoError as e:
            raise StorageError(f"Failed to create indexes: {e}")
        logger.info(f"Indexes ensured on collection {self.collection.name}")

    def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert ``document`` and return it with its ``_id``"""
        document = dict(document)
        try:
            result = self.collection.insert_one(document)
        except DuplicateKeyError as e:
            field = conflicting_field(e)
            value = document.get(field) if field else None
            message = (
                f"A student with {field} '{value}' already exists"
                if field
                else "A student with the same roll or unique code already exists"
            )
            raise ConflictError(message, field=field)
        except (OverflowError, InvalidDocument) as e:
            raise StorageError(f"Failed to encode student: {e}")
        except PyMongoError as e:
            raise StorageError(f"Failed to save student: {e}")

        document["_id"] = result.inserted_id
        return document

    def find_recent(self) -> List[Dict[str, Any]]:
        """Every document, newest ``createdAt`` first"""
        try:
            return list(self.collection.find({}).sort(RECENT_FIRST))
        except PyMongoError as e:
            raise StorageError(f"Failed to fetch students: {e}")

    def ping(self) -> bool:
        try:
            self.collection.database.command("ping")
        except PyMongoError as e:
            logger.warning(f"Database ping failed: {e}")
            return False
        return True

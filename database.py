"""
Backend Client

MongoDB-backed collections used by every screen in the storefront.
Each collection offers the same four calls: list, create, update, delete.
Rows are stored with snake_case keys and boolean flags as numeric strings.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Union, Optional, Dict, Any, List, Tuple

from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.errors import PyMongoError
from pydantic import BaseModel

from config import DATABASE_URL, DATABASE_NAME

logger = logging.getLogger(__name__)

_client = None
db = None

if DATABASE_URL and DATABASE_NAME:
    _client = MongoClient(DATABASE_URL)
    db = _client[DATABASE_NAME]


class BackendError(Exception):
    """Raised when the remote store rejects or cannot serve a call."""


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_storage_key(name: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()


def to_storage_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "1" if value else "0"
    return value


def _to_dict(data: Union[BaseModel, dict]) -> dict:
    if isinstance(data, BaseModel):
        return data.model_dump()
    return dict(data)


def _to_storage(data: Union[BaseModel, dict]) -> dict:
    return {to_storage_key(k): to_storage_value(v) for k, v in _to_dict(data).items()}


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    if not doc:
        return None
    d = dict(doc)
    if "_id" in d:
        d["id"] = str(d.pop("_id"))
    for key, value in d.items():
        if isinstance(value, datetime):
            d[key] = value.isoformat()
    return d


class Collection:
    """One named collection in the remote store."""

    def __init__(self, name: str, database=None):
        self.name = name
        self._db = database

    def _collection(self):
        if self._db is None:
            raise BackendError("Database not available. Check DATABASE_URL and DATABASE_NAME environment variables.")
        return self._db[self.name]

    def list(self, where: Optional[dict] = None, order_by: Optional[Tuple[str, str]] = None,
             limit: Optional[int] = None) -> List[dict]:
        query = _to_storage(where or {})
        if "id" in query:
            query["_id"] = query.pop("id")
        try:
            cursor = self._collection().find(query)
            if order_by:
                field, direction = order_by
                cursor = cursor.sort([(to_storage_key(field), DESCENDING if direction == "desc" else ASCENDING)])
            if limit:
                cursor = cursor.limit(int(limit))
            return [serialize_doc(doc) for doc in cursor]
        except PyMongoError as e:
            raise BackendError(f"Failed to list {self.name}: {e}") from e

    def create(self, row: Union[BaseModel, dict]) -> None:
        payload = _to_storage(row)
        if not payload.get("id"):
            raise BackendError(f"Rows in {self.name} need an explicit id")
        payload["_id"] = str(payload.pop("id"))
        now = datetime.now(timezone.utc)
        payload["created_at"] = now
        payload["updated_at"] = now
        try:
            self._collection().insert_one(payload)
        except PyMongoError as e:
            raise BackendError(f"Failed to create {self.name} row: {e}") from e

    def update(self, _id: str, partial: Dict[str, Any]) -> None:
        changes = _to_storage(partial)
        changes.pop("id", None)
        changes["updated_at"] = datetime.now(timezone.utc)
        try:
            result = self._collection().update_one({"_id": _id}, {"$set": changes})
        except PyMongoError as e:
            raise BackendError(f"Failed to update {self.name} row {_id}: {e}") from e
        if result.matched_count == 0:
            raise BackendError(f"No {self.name} row with id {_id}")

    def delete(self, _id: str) -> None:
        try:
            result = self._collection().delete_one({"_id": _id})
        except PyMongoError as e:
            raise BackendError(f"Failed to delete {self.name} row {_id}: {e}") from e
        if result.deleted_count == 0:
            raise BackendError(f"No {self.name} row with id {_id}")


class Backend:
    """Named collections the storefront talks to."""

    def __init__(self, database=None):
        self.database = database
        self.products = Collection("products", database)
        self.orders = Collection("orders", database)
        self.order_items = Collection("order_items", database)
        self.menu_items = Collection("menu_items", database)
        self.pages = Collection("pages", database)
        self.messages = Collection("messages", database)
        self.users = Collection("users", database)

    def status(self) -> dict:
        if self.database is None:
            return {"database": "Not Available", "collections": []}
        try:
            return {"database": "Connected", "collections": self.database.list_collection_names()}
        except PyMongoError as e:
            logger.error(f"Database status check failed: {e}")
            return {"database": f"Error: {str(e)[:80]}", "collections": []}


def get_backend() -> Backend:
    return Backend(db)

"""
Cart store.

An ordered list of cart lines mirrored to local storage after every change.
"""
import json
import logging
import random
import time
from typing import List, Optional

from pydantic import ValidationError

from config import CART_STORAGE_KEY
from schemas import CartItem, Product, Language

logger = logging.getLogger(__name__)


def new_cart_item_id() -> str:
    # Unique enough to tell lines apart, not meant to be unguessable
    return f"cart_{int(time.time() * 1000)}_{random.random()}"


def make_cart_line(product: Product, weight_kg: float, language: Language) -> dict:
    """Cart line for `product` at `weight_kg`, priced once at add-time."""
    return {
        "product_id": product.id,
        "name": product.name(language),
        "price_per_kg": product.price_per_kg,
        "weight_kg": weight_kg,
        "total_price": product.price_per_kg * weight_kg,
        "image_url": product.image_url,
    }


def load_cart(storage, key: str = CART_STORAGE_KEY) -> List[CartItem]:
    try:
        raw = storage.get_item(key)
        if not raw:
            return []
        return [CartItem.model_validate(item) for item in json.loads(raw)]
    except (ValueError, TypeError, ValidationError) as e:
        logger.warning(f"Discarding unreadable cart data under {key!r}: {e}")
        return []


class CartStore:
    def __init__(self, storage, key: str = CART_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._items: List[CartItem] = load_cart(storage, key)

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def subtotal(self) -> float:
        return sum(item.total_price for item in self._items)

    def get(self, item_id: str) -> Optional[CartItem]:
        return next((item for item in self._items if item.id == item_id), None)

    def add_to_cart(self, line: dict) -> CartItem:
        item = CartItem(**{**line, "id": new_cart_item_id()})
        self._items = [*self._items, item]
        self._persist()
        return item

    def remove_from_cart(self, item_id: str) -> None:
        self._items = [item for item in self._items if item.id != item_id]
        self._persist()

    def clear_cart(self) -> None:
        self._items = []
        self._persist()

    def _persist(self) -> None:
        payload = [item.model_dump(by_alias=True) for item in self._items]
        self.storage.set_item(self.key, json.dumps(payload, ensure_ascii=False))

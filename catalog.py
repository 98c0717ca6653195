"""
Catalog screens: the home page's featured list and the full products list.

Both only ever show active products. Each screen queries the backend when it
is loaded; nothing is cached between screens.
"""
import logging
from typing import Dict, List, Optional

from cart import make_cart_line
from content import HOME, PRODUCTS, CATEGORY_NAMES, translate
from database import BackendError
from schemas import CATEGORIES, CartItem, Product, Language

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 3
HOME_SKELETONS = 3
PRODUCTS_SKELETONS = 6

DEFAULT_WEIGHT_KG = 1.0
WEIGHT_STEP_KG = 0.5
MIN_WEIGHT_KG = 0.5


def fetch_active_products(backend, limit: Optional[int] = None, newest_first: bool = False) -> List[Product]:
    rows = backend.products.list(
        where={"is_active": "1"},
        order_by=("created_at", "desc") if newest_first else None,
        limit=limit,
    )
    products = [Product.from_row(row) for row in rows]
    return [p for p in products if p.is_active]


def matches_search(product: Product, search: str, language: Language) -> bool:
    term = (search or "").lower()
    name = product.name(language) or ""
    description = product.description(language) or ""
    return term in name.lower() or term in description.lower()


def filter_products(products: List[Product], search: str = "", category: str = "all",
                    language: Language = "en") -> List[Product]:
    return [
        p for p in products
        if matches_search(p, search, language) and (category == "all" or p.category == category)
    ]


class QuantitySelector:
    """Weight picked per product, in half-kilo steps, never below 0.5 kg."""

    def __init__(self):
        self._weights: Dict[str, float] = {}

    def weight(self, product_id: str) -> float:
        return self._weights.get(product_id, DEFAULT_WEIGHT_KG)

    def change(self, product_id: str, delta: float) -> float:
        self._weights[product_id] = max(MIN_WEIGHT_KG, self.weight(product_id) + delta)
        return self._weights[product_id]

    def increment(self, product_id: str) -> float:
        return self.change(product_id, WEIGHT_STEP_KG)

    def decrement(self, product_id: str) -> float:
        return self.change(product_id, -WEIGHT_STEP_KG)

    def line_total(self, product: Product) -> float:
        return product.price_per_kg * self.weight(product.id)


class CatalogScreen:
    skeletons = 0

    def __init__(self, storefront):
        self.storefront = storefront
        self.products: List[Product] = []
        self.loading = True

    def _fetch(self) -> List[Product]:
        raise NotImplementedError

    def load(self) -> "CatalogScreen":
        try:
            self.products = self._fetch()
        except BackendError as e:
            logger.error(f"Error fetching products: {e}")
            self.products = []
        finally:
            self.loading = False
        return self

    def find(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def add_to_cart(self, product_id: str, weight_kg: Optional[float] = None) -> Optional[CartItem]:
        product = self.find(product_id)
        if product is None:
            return None
        if weight_kg is None:
            weight_kg = self.storefront.quantities.weight(product_id)
        line = make_cart_line(product, weight_kg, self.storefront.language)
        return self.storefront.cart.add_to_cart(line)

    def product_card(self, product: Product) -> dict:
        language = self.storefront.language
        return {
            **product.model_dump(by_alias=True),
            "name": product.name(language),
            "description": product.description(language),
        }


class HomeScreen(CatalogScreen):
    skeletons = HOME_SKELETONS

    def _fetch(self) -> List[Product]:
        return fetch_active_products(self.storefront.backend, limit=FEATURED_LIMIT)

    def add_to_cart(self, product_id: str, weight_kg: Optional[float] = DEFAULT_WEIGHT_KG) -> Optional[CartItem]:
        return super().add_to_cart(product_id, weight_kg)

    def render(self) -> dict:
        return {
            "loading": self.loading,
            "skeletons": self.skeletons if self.loading else 0,
            "content": translate(HOME, self.storefront.language),
            "featured": [self.product_card(p) for p in self.products],
        }


class ProductsScreen(CatalogScreen):
    skeletons = PRODUCTS_SKELETONS

    def __init__(self, storefront, search: str = "", category: str = "all"):
        super().__init__(storefront)
        self.search_term = search
        self.selected_category = category if category in CATEGORIES else "all"

    def _fetch(self) -> List[Product]:
        return fetch_active_products(self.storefront.backend, newest_first=True)

    @property
    def visible(self) -> List[Product]:
        return filter_products(self.products, self.search_term, self.selected_category, self.storefront.language)

    def product_card(self, product: Product) -> dict:
        card = super().product_card(product)
        card["weightKg"] = self.storefront.quantities.weight(product.id)
        card["lineTotal"] = self.storefront.quantities.line_total(product)
        return card

    def render(self) -> dict:
        language = self.storefront.language
        visible = self.visible
        return {
            "loading": self.loading,
            "skeletons": self.skeletons if self.loading else 0,
            "content": translate(PRODUCTS, language),
            "categories": [{"value": c, "label": translate(CATEGORY_NAMES, language)[c]}
                           for c in ("all", *CATEGORIES)],
            "search": self.search_term,
            "category": self.selected_category,
            "products": [self.product_card(p) for p in visible],
            "empty": not self.loading and not visible,
        }

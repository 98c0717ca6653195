"""
Back-office screens: dashboard, products, orders, menu items and pages.

The CRUD screens share one pattern: load the whole collection, edit through a
modal form, then reload the whole collection after every write. Failures are
logged and surfaced as a toast; nothing is retried or rolled back.
"""
import logging
import re
import time
from typing import List, Optional, Type

from pydantic import BaseModel

from auth import AuthError
from content import ADMIN_MISSING_INFO
from database import BackendError
from schemas import (
    CATEGORIES, ORDER_STATUSES, MenuItem, MenuItemForm, Order, OrderItem, Page, PageForm, Product, ProductForm,
)

logger = logging.getLogger(__name__)

ADMIN_SKELETONS = 5
RECENT_ORDERS = 5
DASHBOARD_ORDER_LIMIT = 100

# Only pending orders can move, and only to a final state
STATUS_TRANSITIONS = {"pending": ("completed", "cancelled")}


def generate_slug(title: str) -> str:
    """URL slug from a title: "About Us!" -> "about-us"."""
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def _timestamp_id(prefix: str) -> str:
    return f"{prefix}_{int(time.time() * 1000)}"


class AdminScreen:
    collection: str = ""
    model: Type[BaseModel] = BaseModel
    form_model: Optional[Type[BaseModel]] = None
    order_by = ("created_at", "desc")
    id_prefix: str = ""
    label: str = ""
    plural: str = ""
    status_field: Optional[str] = None
    status_words = ("activated", "deactivated")
    required: tuple = ()

    def __init__(self, storefront):
        self.storefront = storefront
        self.items: List = []
        self.loading = True
        self.dialog_open = False
        self.editing = None
        self.form = self.blank_form()

    @property
    def rows(self):
        return getattr(self.storefront.backend, self.collection)

    @property
    def toaster(self):
        return self.storefront.toaster

    def fetch(self) -> "AdminScreen":
        try:
            rows = self.rows.list(order_by=self.order_by)
            self.items = [self.model.from_row(row) for row in rows]
        except BackendError as e:
            logger.error(f"Error fetching {self.plural}: {e}")
            self.toaster.error("Error", f"Failed to fetch {self.plural}")
        finally:
            self.loading = False
        return self

    def find(self, item_id: str):
        return next((item for item in self.items if item.id == item_id), None)

    # ---- modal form ----

    def blank_form(self):
        return self.form_model() if self.form_model is not None else None

    def form_from(self, item):
        raise NotImplementedError

    def open_create(self):
        self.editing = None
        self.form = self.blank_form()
        self.dialog_open = True
        return self.form

    def open_edit(self, item_id: str):
        item = self.find(item_id)
        if item is None:
            return None
        self.editing = item
        self.form = self.form_from(item)
        self.dialog_open = True
        return self.form

    def close_dialog(self) -> None:
        self.dialog_open = False
        self.editing = None
        self.form = self.blank_form()

    def prepare(self, form):
        return form

    def to_row(self, form, user) -> dict:
        raise NotImplementedError

    def submit(self) -> bool:
        form = self.prepare(self.form)
        self.form = form
        if any(not getattr(form, field) for field in self.required):
            self.toaster.error(*ADMIN_MISSING_INFO)
            return False
        try:
            user = self.storefront.auth.me()
            data = self.to_row(form, user)
            if self.editing is not None:
                self.rows.update(self.editing.id, data)
                self.toaster.toast("Success", f"{self.label} updated successfully")
            else:
                self.rows.create({"id": _timestamp_id(self.id_prefix), **data})
                self.toaster.toast("Success", f"{self.label} created successfully")
        except (BackendError, AuthError, ValueError) as e:
            logger.error(f"Error saving {self.label.lower()}: {e}")
            self.toaster.error("Error", f"Failed to save {self.label.lower()}")
            return False
        self.close_dialog()
        self.fetch()
        return True

    # ---- row actions ----

    def toggle(self, item_id: str) -> bool:
        item = self.find(item_id)
        if item is None or self.status_field is None:
            return False
        current = getattr(item, self.status_field)
        try:
            self.rows.update(item.id, {self.status_field: not current})
        except BackendError as e:
            logger.error(f"Error updating {self.label.lower()} status: {e}")
            self.toaster.error("Error", f"Failed to update {self.label.lower()} status")
            return False
        word = self.status_words[1] if current else self.status_words[0]
        self.toaster.toast("Success", f"{self.label} {word} successfully")
        self.fetch()
        return True

    def delete(self, item_id: str, confirmed: bool = False) -> bool:
        """Delete after the user confirmed; declining makes no call."""
        if not confirmed:
            return False
        try:
            self.rows.delete(item_id)
        except BackendError as e:
            logger.error(f"Error deleting {self.label.lower()}: {e}")
            self.toaster.error("Error", f"Failed to delete {self.label.lower()}")
            return False
        self.toaster.toast("Success", f"{self.label} deleted successfully")
        self.fetch()
        return True

    def render(self, items=None) -> dict:
        items = self.items if items is None else items
        return {
            "loading": self.loading,
            "skeletons": ADMIN_SKELETONS if self.loading else 0,
            "items": [item.model_dump(by_alias=True) for item in items],
            "empty": not self.loading and not items,
        }


class ProductsAdmin(AdminScreen):
    collection = "products"
    model = Product
    form_model = ProductForm
    id_prefix = "prod"
    label = "Product"
    plural = "products"
    status_field = "is_active"
    required = ("name_en", "name_ka", "price_per_kg")

    def form_from(self, item: Product) -> ProductForm:
        return ProductForm(
            name_en=item.name_en,
            name_ka=item.name_ka,
            description_en=item.description_en or "",
            description_ka=item.description_ka or "",
            price_per_kg=str(item.price_per_kg),
            image_url=item.image_url or "",
            category=item.category,
        )

    def to_row(self, form: ProductForm, user) -> dict:
        if form.category not in CATEGORIES:
            raise ValueError(f"Unknown category {form.category!r}")
        return {
            "name_en": form.name_en,
            "name_ka": form.name_ka,
            "description_en": form.description_en or None,
            "description_ka": form.description_ka or None,
            "price_per_kg": float(form.price_per_kg),
            "image_url": form.image_url or None,
            "category": form.category,
            "is_active": True,
            "user_id": user.id,
        }

    def filtered(self, search: str = "") -> List[Product]:
        term = (search or "").lower()
        return [p for p in self.items if term in p.name_en.lower() or term in p.name_ka.lower()]


class MenusAdmin(AdminScreen):
    collection = "menu_items"
    model = MenuItem
    form_model = MenuItemForm
    order_by = ("order_index", "asc")
    id_prefix = "menu"
    label = "Menu item"
    plural = "menu items"
    status_field = "is_active"
    required = ("title_en", "title_ka", "url")

    def blank_form(self) -> MenuItemForm:
        return MenuItemForm(order_index=len(self.items))

    def form_from(self, item: MenuItem) -> MenuItemForm:
        return MenuItemForm(title_en=item.title_en, title_ka=item.title_ka, url=item.url,
                            order_index=item.order_index)

    def to_row(self, form: MenuItemForm, user) -> dict:
        return {
            "title_en": form.title_en,
            "title_ka": form.title_ka,
            "url": form.url,
            "order_index": form.order_index,
            "is_active": True,
            "user_id": user.id,
        }


class PagesAdmin(AdminScreen):
    collection = "pages"
    model = Page
    form_model = PageForm
    id_prefix = "page"
    label = "Page"
    plural = "pages"
    status_field = "is_published"
    status_words = ("published", "unpublished")
    required = ("title_en", "title_ka", "slug")

    def form_from(self, item: Page) -> PageForm:
        return PageForm(title_en=item.title_en, title_ka=item.title_ka, slug=item.slug,
                        content_en=item.content_en or "", content_ka=item.content_ka or "")

    def prepare(self, form: PageForm) -> PageForm:
        if not form.slug.strip() and form.title_en:
            return form.model_copy(update={"slug": generate_slug(form.title_en)})
        return form

    def to_row(self, form: PageForm, user) -> dict:
        return {
            "title_en": form.title_en,
            "title_ka": form.title_ka,
            "slug": form.slug,
            "content_en": form.content_en or None,
            "content_ka": form.content_ka or None,
            "is_published": True,
            "user_id": user.id,
        }


def filter_orders(orders: List[Order], search: str = "", status: str = "all") -> List[Order]:
    term = (search or "").lower()

    def matches(order: Order) -> bool:
        return (term in order.customer_name.lower()
                or (search or "") in order.customer_phone
                or term in order.id.lower())

    return [o for o in orders if matches(o) and (status == "all" or o.status == status)]


class OrdersAdmin(AdminScreen):
    collection = "orders"
    model = Order
    label = "Order"
    plural = "orders"

    def __init__(self, storefront):
        super().__init__(storefront)
        self.selected: Optional[Order] = None

    def filtered(self, search: str = "", status: str = "all") -> List[Order]:
        return filter_orders(self.items, search, status)

    def update_status(self, order_id: str, new_status: str) -> bool:
        order = self.find(order_id)
        if order is None:
            return False
        if new_status not in STATUS_TRANSITIONS.get(order.status, ()):
            self.toaster.error("Error", f"Cannot move a {order.status} order to {new_status}")
            return False
        try:
            self.rows.update(order_id, {"status": new_status})
        except BackendError as e:
            logger.error(f"Error updating order status: {e}")
            self.toaster.error("Error", "Failed to update order status")
            return False
        self.toaster.toast("Success", "Order status updated successfully")
        self.fetch()
        return True

    def view_details(self, order_id: str) -> Optional[Order]:
        """Load the order's line items on demand."""
        order = self.find(order_id)
        if order is None:
            return None
        try:
            rows = self.storefront.backend.order_items.list(where={"order_id": order.id})
        except BackendError as e:
            logger.error(f"Error fetching order details: {e}")
            self.toaster.error("Error", "Failed to fetch order details")
            return None
        self.selected = order.model_copy(update={"items": [OrderItem.from_row(row) for row in rows]})
        self.dialog_open = True
        return self.selected

    def render(self, items=None) -> dict:
        data = super().render(items)
        for item in data["items"]:
            item["actions"] = list(STATUS_TRANSITIONS.get(item["status"], ()))
        data["statuses"] = ["all", *ORDER_STATUSES]
        return data


class Dashboard:
    def __init__(self, storefront):
        self.storefront = storefront
        self.loading = True
        self.stats = {
            "totalProducts": 0,
            "totalOrders": 0,
            "pendingOrders": 0,
            "totalRevenue": 0.0,
            "recentOrders": [],
        }

    def fetch(self) -> "Dashboard":
        backend = self.storefront.backend
        try:
            products = backend.products.list(where={"is_active": "1"})
            orders = [Order.from_row(row) for row in
                      backend.orders.list(order_by=("created_at", "desc"), limit=DASHBOARD_ORDER_LIMIT)]
            self.stats = {
                "totalProducts": len(products),
                "totalOrders": len(orders),
                "pendingOrders": sum(1 for o in orders if o.status == "pending"),
                "totalRevenue": sum(o.total_amount for o in orders),
                "recentOrders": [
                    o.model_dump(by_alias=True, include={"id", "customer_name", "total_amount", "status", "created_at"})
                    for o in orders[:RECENT_ORDERS]
                ],
            }
        except BackendError as e:
            logger.error(f"Error fetching dashboard data: {e}")
        finally:
            self.loading = False
        return self

    def render(self) -> dict:
        return {"loading": self.loading, "stats": self.stats}

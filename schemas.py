"""
Display and Form Schemas for the Piwkina.ge storefront

Display models are built from raw backend rows (snake_case keys, flags as
numeric strings) via `from_row` and serialize with camelCase aliases.
Form models mirror the modal forms; required fields are checked by the
screens, not by pydantic, so a missing field becomes a toast instead of a 422.
"""
from typing import List, Optional, Literal, Any
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

Language = Literal["en", "ka"]

CATEGORIES = ("main", "special", "seasonal")
ORDER_STATUSES = ("pending", "completed", "cancelled")


def flag(value: Any) -> bool:
    """Numeric-string flag from the store -> bool (`"1"` is true, `"0"` false)."""
    try:
        return float(value) > 0
    except (TypeError, ValueError):
        return False


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(ApiModel):
    id: str
    email: str
    display_name: Optional[str] = None
    is_admin: bool = False

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls(
            id=row["id"],
            email=row["email"],
            display_name=row.get("display_name"),
            is_admin=flag(row.get("is_admin")),
        )


class Product(ApiModel):
    id: str
    name_en: str
    name_ka: str
    description_en: Optional[str] = None
    description_ka: Optional[str] = None
    price_per_kg: float
    image_url: Optional[str] = None
    category: str = "main"
    is_active: bool = True
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Product":
        return cls(
            id=row["id"],
            name_en=row.get("name_en") or "",
            name_ka=row.get("name_ka") or "",
            description_en=row.get("description_en"),
            description_ka=row.get("description_ka"),
            price_per_kg=float(row.get("price_per_kg") or 0),
            image_url=row.get("image_url"),
            category=row.get("category") or "main",
            is_active=flag(row.get("is_active")),
            created_at=row.get("created_at"),
        )

    def name(self, language: Language) -> str:
        return self.name_en if language == "en" else self.name_ka

    def description(self, language: Language) -> Optional[str]:
        return self.description_en if language == "en" else self.description_ka


class CartItem(ApiModel):
    id: str
    product_id: str
    name: str
    price_per_kg: float
    weight_kg: float
    total_price: float
    image_url: Optional[str] = None


class OrderItem(ApiModel):
    id: str
    order_id: Optional[str] = None
    product_id: str
    quantity: int = 1
    weight_kg: float
    unit_price: float
    total_price: float

    @classmethod
    def from_row(cls, row: dict) -> "OrderItem":
        return cls(
            id=row["id"],
            order_id=row.get("order_id"),
            product_id=row.get("product_id") or "",
            quantity=int(row.get("quantity") or 1),
            weight_kg=float(row.get("weight_kg") or 0),
            unit_price=float(row.get("unit_price") or 0),
            total_price=float(row.get("total_price") or 0),
        )


class Order(ApiModel):
    id: str
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    customer_address: str
    total_amount: float
    status: str = "pending"
    notes: Optional[str] = None
    created_at: Optional[str] = None
    items: Optional[List[OrderItem]] = None

    @classmethod
    def from_row(cls, row: dict) -> "Order":
        return cls(
            id=row["id"],
            customer_name=row.get("customer_name") or "",
            customer_phone=row.get("customer_phone") or "",
            customer_email=row.get("customer_email"),
            customer_address=row.get("customer_address") or "",
            total_amount=float(row.get("total_amount") or 0),
            status=row.get("status") or "pending",
            notes=row.get("notes"),
            created_at=row.get("created_at"),
        )


class MenuItem(ApiModel):
    id: str
    title_en: str
    title_ka: str
    url: str
    order_index: int = 0
    is_active: bool = True

    @classmethod
    def from_row(cls, row: dict) -> "MenuItem":
        return cls(
            id=row["id"],
            title_en=row.get("title_en") or "",
            title_ka=row.get("title_ka") or "",
            url=row.get("url") or "",
            order_index=int(row.get("order_index") or 0),
            is_active=flag(row.get("is_active")),
        )


class Page(ApiModel):
    id: str
    title_en: str
    title_ka: str
    slug: str
    content_en: Optional[str] = None
    content_ka: Optional[str] = None
    is_published: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Page":
        return cls(
            id=row["id"],
            title_en=row.get("title_en") or "",
            title_ka=row.get("title_ka") or "",
            slug=row.get("slug") or "",
            content_en=row.get("content_en"),
            content_ka=row.get("content_ka"),
            is_published=flag(row.get("is_published")),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


# ===================== Forms =====================

class CustomerInfo(ApiModel):
    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    notes: str = ""


class ContactForm(ApiModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""


class ProductForm(ApiModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name_en: str = ""
    name_ka: str = ""
    description_en: str = ""
    description_ka: str = ""
    price_per_kg: str = Field("", description="Raw text from the price field")
    image_url: str = ""
    category: str = "main"


class MenuItemForm(ApiModel):
    title_en: str = ""
    title_ka: str = ""
    url: str = ""
    order_index: int = 0


class PageForm(ApiModel):
    title_en: str = ""
    title_ka: str = ""
    slug: str = ""
    content_en: str = ""
    content_ka: str = ""


class Credentials(BaseModel):
    email: EmailStr
    password: str
    display_name: Optional[str] = None

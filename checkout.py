"""
Checkout flow behind the cart page.

idle -> submitting -> idle. A successful submit writes one order row, then
one order-item row per cart line, then clears the cart and the form.
Writes are not atomic: if an item write fails the order row stays behind
with fewer items than the cart had, and the user only sees a failure toast.
"""
import logging
import random
import time

from auth import AuthError
from config import DELIVERY_FEE
from content import CART, translate
from database import BackendError
from schemas import CustomerInfo

logger = logging.getLogger(__name__)

IDLE = "idle"
SUBMITTING = "submitting"

REQUIRED_FIELDS = ("name", "phone", "address")


def new_order_id() -> str:
    return f"order_{int(time.time() * 1000)}"


def new_order_item_id() -> str:
    return f"item_{int(time.time() * 1000)}_{random.random()}"


class CheckoutFlow:
    def __init__(self, storefront):
        self.storefront = storefront
        self.customer_info = CustomerInfo()
        self.status = IDLE

    @property
    def subtotal(self) -> float:
        return self.storefront.cart.subtotal

    @property
    def delivery_fee(self) -> float:
        return DELIVERY_FEE

    @property
    def grand_total(self) -> float:
        return self.subtotal + self.delivery_fee

    def update_customer_info(self, **fields) -> CustomerInfo:
        self.customer_info = self.customer_info.model_copy(update=fields)
        return self.customer_info

    def _validate(self, t: dict) -> bool:
        toaster = self.storefront.toaster
        if any(not getattr(self.customer_info, field) for field in REQUIRED_FIELDS):
            toaster.error(t["missingInfo"], t["missingInfoDesc"])
            return False
        if len(self.storefront.cart) == 0:
            toaster.error(t["emptyCartTitle"], t["emptyCartToast"])
            return False
        return True

    def submit(self) -> bool:
        """Place the order. Returns True when every row was written."""
        if self.status == SUBMITTING:
            return False
        t = translate(CART, self.storefront.language)
        if not self._validate(t):
            return False

        backend = self.storefront.backend
        cart = self.storefront.cart
        info = self.customer_info
        self.status = SUBMITTING
        try:
            order_id = new_order_id()
            user = self.storefront.auth.me()

            backend.orders.create({
                "id": order_id,
                "customer_name": info.name,
                "customer_phone": info.phone,
                "customer_email": info.email or None,
                "customer_address": info.address,
                "total_amount": self.grand_total,
                "status": "pending",
                "notes": info.notes or None,
                "user_id": user.id,
            })

            # quantity stays 1 per line; the real amount is weight_kg
            for item in cart.items:
                backend.order_items.create({
                    "id": new_order_item_id(),
                    "order_id": order_id,
                    "product_id": item.product_id,
                    "quantity": 1,
                    "weight_kg": item.weight_kg,
                    "unit_price": item.price_per_kg,
                    "total_price": item.total_price,
                    "user_id": user.id,
                })

            self.storefront.toaster.toast(t["orderSuccess"], t["orderSuccessDesc"])
            logger.info(f"Order {order_id} placed with {len(cart)} items")
            cart.clear_cart()
            self.customer_info = CustomerInfo()
            return True
        except (BackendError, AuthError) as e:
            logger.error(f"Error placing order: {e}")
            self.storefront.toaster.error(t["orderError"])
            return False
        finally:
            self.status = IDLE

    def render(self) -> dict:
        t = translate(CART, self.storefront.language)
        cart = self.storefront.cart
        return {
            "content": t,
            "items": [item.model_dump(by_alias=True) for item in cart.items],
            "empty": len(cart) == 0,
            "subtotal": round(self.subtotal, 2),
            "deliveryFee": self.delivery_fee,
            "grandTotal": round(self.grand_total, 2),
            "customerInfo": self.customer_info.model_dump(by_alias=True),
            "status": self.status,
        }

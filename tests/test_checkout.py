import pytest

import database
from cart import make_cart_line
from checkout import IDLE
from database import BackendError
from schemas import Product


@pytest.fixture
def create_calls(monkeypatch):
    """Record every Collection.create call as (collection, row id)."""
    calls = []
    original = database.Collection.create

    def recording_create(self, row):
        calls.append((self.name, row["id"]))
        return original(self, row)

    monkeypatch.setattr(database.Collection, "create", recording_create)
    return calls


def fill_cart(storefront, weights=(1.0, 2.5)):
    for i, weight in enumerate(weights):
        product = Product(id=f"prod_{i}", name_en=f"Item {i}", name_ka=f"ნივთი {i}", price_per_kg=20.0 + i)
        storefront.cart.add_to_cart(make_cart_line(product, weight, storefront.language))


def test_missing_required_field_aborts_without_calls(storefront, customer, create_calls):
    fill_cart(storefront)
    storefront.checkout.update_customer_info(name="", phone="123", address="X")

    assert storefront.checkout.submit() is False

    assert create_calls == []
    toast = storefront.toaster.pending[-1]
    assert toast.title == "Missing Information"
    assert toast.variant == "destructive"
    assert len(storefront.cart) == 2


def test_missing_field_toast_is_localized(storefront, customer):
    storefront.language = "ka"
    fill_cart(storefront)

    storefront.checkout.submit()

    assert storefront.toaster.pending[-1].title == "ნაკლული ინფორმაცია"


def test_empty_cart_aborts_with_its_own_toast(storefront, customer, create_calls):
    storefront.checkout.update_customer_info(name="Nino", phone="555", address="Rustaveli 1")

    assert storefront.checkout.submit() is False

    assert create_calls == []
    assert storefront.toaster.pending[-1].title == "Empty Cart"


def test_submit_writes_order_then_one_item_per_line(storefront, customer, backend, create_calls):
    fill_cart(storefront, weights=(1.0, 2.5, 0.5))
    expected_total = storefront.cart.subtotal
    flow = storefront.checkout
    flow.update_customer_info(name="Nino", phone="555 12 34", address="Rustaveli 1", notes="Ring twice")

    assert flow.submit() is True

    assert [name for name, _ in create_calls] == ["orders", "order_items", "order_items", "order_items"]
    order = backend.orders.list()[0]
    assert order["status"] == "pending"
    assert order["total_amount"] == pytest.approx(expected_total)
    assert order["customer_email"] is None
    assert order["notes"] == "Ring twice"
    assert order["user_id"] == customer.id

    items = backend.order_items.list(where={"order_id": order["id"]})
    assert len(items) == 3
    assert all(item["quantity"] == 1 for item in items)
    assert sum(item["total_price"] for item in items) == pytest.approx(order["total_amount"])
    assert sorted(item["weight_kg"] for item in items) == [0.5, 1.0, 2.5]


def test_success_clears_cart_and_form(storefront, customer):
    fill_cart(storefront)
    flow = storefront.checkout
    flow.update_customer_info(name="Nino", phone="555", address="Rustaveli 1")

    flow.submit()

    assert len(storefront.cart) == 0
    assert flow.customer_info.name == ""
    assert flow.status == IDLE
    assert storefront.toaster.pending[-1].title == "Order placed successfully!"


def test_item_failure_leaves_cart_and_orphan_order(storefront, customer, backend, monkeypatch):
    fill_cart(storefront)
    flow = storefront.checkout
    flow.update_customer_info(name="Nino", phone="555", address="Rustaveli 1")

    def failing_create(row):
        raise BackendError("connection reset")

    monkeypatch.setattr(backend.order_items, "create", failing_create)

    assert flow.submit() is False

    assert len(storefront.cart) == 2
    assert flow.customer_info.name == "Nino"
    assert flow.status == IDLE
    assert len(backend.orders.list()) == 1
    toast = storefront.toaster.pending[-1]
    assert toast.title == "Failed to place order. Please try again."
    assert toast.variant == "destructive"


def test_signed_out_user_cannot_place_order(storefront, create_calls):
    fill_cart(storefront)
    storefront.checkout.update_customer_info(name="Nino", phone="555", address="Rustaveli 1")

    assert storefront.checkout.submit() is False

    assert create_calls == []
    assert storefront.toaster.pending[-1].variant == "destructive"


def test_totals_include_free_delivery(storefront):
    fill_cart(storefront, weights=(2.0,))

    data = storefront.checkout.render()

    assert data["subtotal"] == 40.0
    assert data["deliveryFee"] == 0.0
    assert data["grandTotal"] == 40.0

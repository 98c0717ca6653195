import mongomock
import pytest

from database import Backend
from session import Storefront
from storage import MemoryStorage

ADMIN_EMAIL = "admin@piwkina.ge"


@pytest.fixture
def mongo():
    return mongomock.MongoClient()["piwkina_test"]


@pytest.fixture
def backend(mongo):
    return Backend(mongo)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def storefront(backend, storage):
    sf = Storefront(backend, storage, admin_email=ADMIN_EMAIL)
    sf.start()
    yield sf
    sf.close()


@pytest.fixture
def customer(storefront):
    return storefront.auth.signup("nino@piwkina.ge", "khachapuri", "Nino")


@pytest.fixture
def admin(storefront):
    return storefront.auth.signup(ADMIN_EMAIL, "mtsvadi-2024", "Admin")


@pytest.fixture
def make_product(backend):
    def _make(product_id, name_en="Roasted Pork", name_ka="შემწვარი გოჭი", price=30.0,
              category="main", is_active=True, **extra):
        backend.products.create({
            "id": product_id,
            "name_en": name_en,
            "name_ka": name_ka,
            "price_per_kg": price,
            "category": category,
            "is_active": is_active,
            **extra,
        })
        return product_id
    return _make

"""
Piwkina.ge storefront API

Every route drives one screen object of the calling client's storefront and
returns its rendered state plus the toasts produced while handling the
request. Clients identify themselves with the bearer token issued at
signup/login.
"""
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends, Request, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import OAuth2PasswordBearer

from admin import Dashboard, ProductsAdmin, OrdersAdmin, MenusAdmin, PagesAdmin
from auth import AuthError
from catalog import HomeScreen, ProductsScreen
from config import ADMIN_EMAIL, LOG_LEVEL, PORT, STORAGE_PATH
from contact import ContactScreen
from content import (
    ABOUT, FOOTER, LANGUAGE_SWITCH_LABEL, LOADING_MESSAGE, NAVIGATION, SIGN_IN_PROMPT, SOCIAL_LINKS, translate,
)
from database import BackendError, get_backend
from schemas import (
    ApiModel, ContactForm, Credentials, CustomerInfo, MenuItemForm, PageForm, ProductForm, User,
)
from session import LOADING, SIGNED_OUT, Sessions, Storefront, shows_admin_link
from storage import FileStorage

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def create_app(backend=None, storage=None, admin_email: str = ADMIN_EMAIL) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting storefront API")
        app.state.sessions = Sessions(
            backend if backend is not None else get_backend(),
            storage if storage is not None else FileStorage(STORAGE_PATH),
            admin_email=admin_email,
        )
        yield
        app.state.sessions.close_all()

    app = FastAPI(title="Piwkina.ge Storefront API", version="1.0.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)
    return app


# ============ Request models ==========
class QuantityChange(ApiModel):
    change: float


class AddToCartRequest(ApiModel):
    product_id: str
    weight_kg: Optional[float] = None


class StatusChange(ApiModel):
    status: str


# ============ Dependencies ==========
def get_sessions(request: Request) -> Sessions:
    return request.app.state.sessions


def find_storefront(token: Optional[str] = Depends(oauth2_scheme),
                    sessions: Sessions = Depends(get_sessions)) -> Optional[Storefront]:
    return sessions.resolve(token)


def get_storefront(storefront: Optional[Storefront] = Depends(find_storefront)) -> Storefront:
    if storefront is None:
        raise HTTPException(status_code=401, detail=SIGN_IN_PROMPT, headers={"WWW-Authenticate": "Bearer"})
    return storefront


def current_user(storefront: Storefront = Depends(get_storefront)) -> User:
    status = storefront.session.status
    if status == LOADING:
        raise HTTPException(status_code=503, detail=LOADING_MESSAGE)
    if status == SIGNED_OUT:
        raise HTTPException(status_code=401, detail=SIGN_IN_PROMPT, headers={"WWW-Authenticate": "Bearer"})
    return storefront.session.user


def admin_user(user: User = Depends(current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admins only")
    return user


def respond(storefront: Storefront, data: dict) -> dict:
    return {**data, "toasts": storefront.toaster.drain()}


def signed_in(storefront: Storefront, token: str) -> dict:
    return {
        "user": storefront.session.user.model_dump(by_alias=True),
        "accessToken": token,
        "tokenType": "bearer",
    }


def register_routes(app: FastAPI) -> None:

    # ===================== Public =====================
    @app.get("/")
    def root():
        return {"message": "Piwkina.ge storefront API running"}

    @app.get("/test")
    def test_database(sessions: Sessions = Depends(get_sessions)):
        return {"backend": "Running", "openSessions": len(sessions), **sessions.backend.status()}

    @app.get("/session")
    def get_session(storefront: Optional[Storefront] = Depends(find_storefront)):
        if storefront is None:
            return {"status": SIGNED_OUT, "user": None, "prompt": SIGN_IN_PROMPT}
        session = storefront.session
        return {
            "status": session.status,
            "user": session.user.model_dump(by_alias=True) if session.user else None,
            "language": storefront.language,
        }

    # ===================== Auth =====================
    @app.post("/auth/signup")
    def signup(payload: Credentials, sessions: Sessions = Depends(get_sessions)):
        try:
            storefront, token = sessions.signup(payload.email, payload.password, payload.display_name)
        except AuthError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except BackendError as e:
            logger.error(f"Signup failed: {e}")
            raise HTTPException(status_code=503, detail="Service unavailable")
        return signed_in(storefront, token)

    @app.post("/auth/login")
    def login(payload: Credentials, sessions: Sessions = Depends(get_sessions)):
        try:
            storefront, token = sessions.login(payload.email, payload.password)
        except AuthError as e:
            raise HTTPException(status_code=401, detail=str(e), headers={"WWW-Authenticate": "Bearer"})
        except BackendError as e:
            logger.error(f"Login failed: {e}")
            raise HTTPException(status_code=503, detail="Service unavailable")
        return signed_in(storefront, token)

    @app.post("/auth/logout")
    def logout(token: Optional[str] = Depends(oauth2_scheme), sessions: Sessions = Depends(get_sessions),
               _: Storefront = Depends(get_storefront)):
        sessions.logout(token)
        return {"status": SIGNED_OUT}

    @app.post("/language/toggle")
    def toggle_language(storefront: Storefront = Depends(get_storefront)):
        return {"language": storefront.toggle_language()}

    @app.get("/layout")
    def layout(path: str = "/", storefront: Storefront = Depends(get_storefront),
               user: User = Depends(current_user)):
        language = storefront.language
        links = [{"name": item["name"][language], "href": item["href"]} for item in NAVIGATION]
        return {
            "header": {
                "navigation": [{**link, "active": link["href"] == path} for link in links],
                "languageSwitch": LANGUAGE_SWITCH_LABEL[language],
                "cartItemsCount": len(storefront.cart),
                "showAdmin": shows_admin_link(user, path, storefront.admin_email),
            },
            "footer": {**translate(FOOTER, language), "links": links, "social": SOCIAL_LINKS},
        }

    # ===================== Catalog =====================
    @app.get("/home")
    def home(storefront: Storefront = Depends(get_storefront), _: User = Depends(current_user)):
        return respond(storefront, HomeScreen(storefront).load().render())

    @app.get("/products")
    def products(search: str = "", category: str = "all", storefront: Storefront = Depends(get_storefront),
                 _: User = Depends(current_user)):
        screen = ProductsScreen(storefront, search=search, category=category).load()
        return respond(storefront, screen.render())

    @app.post("/products/{product_id}/quantity")
    def change_quantity(product_id: str, payload: QuantityChange, storefront: Storefront = Depends(get_storefront),
                        _: User = Depends(current_user)):
        quantities = storefront.quantities
        weight = quantities.increment(product_id) if payload.change > 0 else quantities.decrement(product_id)
        return {"productId": product_id, "weightKg": weight}

    # ===================== Cart & Checkout =====================
    @app.post("/cart/items")
    def add_to_cart(payload: AddToCartRequest, storefront: Storefront = Depends(get_storefront),
                    _: User = Depends(current_user)):
        item = ProductsScreen(storefront).load().add_to_cart(payload.product_id, payload.weight_kg)
        if item is None:
            raise HTTPException(status_code=404, detail="Product not found")
        return respond(storefront, {"item": item.model_dump(by_alias=True), "cartItemsCount": len(storefront.cart)})

    @app.get("/cart")
    def get_cart(storefront: Storefront = Depends(get_storefront), _: User = Depends(current_user)):
        return respond(storefront, storefront.checkout.render())

    @app.delete("/cart/items/{item_id}")
    def remove_from_cart(item_id: str, storefront: Storefront = Depends(get_storefront),
                         _: User = Depends(current_user)):
        storefront.cart.remove_from_cart(item_id)
        return respond(storefront, storefront.checkout.render())

    @app.delete("/cart")
    def clear_cart(storefront: Storefront = Depends(get_storefront), _: User = Depends(current_user)):
        storefront.cart.clear_cart()
        return respond(storefront, storefront.checkout.render())

    @app.put("/cart/customer")
    def update_customer(payload: CustomerInfo, storefront: Storefront = Depends(get_storefront),
                        _: User = Depends(current_user)):
        storefront.checkout.update_customer_info(**payload.model_dump(exclude_unset=True))
        return respond(storefront, storefront.checkout.render())

    @app.post("/cart/checkout")
    def checkout(payload: Optional[CustomerInfo] = None, storefront: Storefront = Depends(get_storefront),
                 _: User = Depends(current_user)):
        if payload is not None:
            storefront.checkout.update_customer_info(**payload.model_dump(exclude_unset=True))
        placed = storefront.checkout.submit()
        return respond(storefront, {"placed": placed, **storefront.checkout.render()})

    # ===================== Static pages =====================
    @app.get("/about")
    def about(storefront: Storefront = Depends(get_storefront), _: User = Depends(current_user)):
        return {"content": translate(ABOUT, storefront.language)}

    @app.get("/contact")
    def contact(storefront: Storefront = Depends(get_storefront), _: User = Depends(current_user)):
        return respond(storefront, ContactScreen(storefront).render())

    @app.post("/contact")
    def send_contact(payload: ContactForm, storefront: Storefront = Depends(get_storefront),
                     _: User = Depends(current_user)):
        screen = ContactScreen(storefront)
        sent = screen.submit(payload)
        return respond(storefront, {"sent": sent, **screen.render()})

    # ===================== Admin =====================
    @app.get("/admin")
    def admin_dashboard(storefront: Storefront = Depends(get_storefront), _: User = Depends(admin_user)):
        return respond(storefront, Dashboard(storefront).fetch().render())

    # ---- products ----
    @app.get("/admin/products")
    def admin_products(search: str = "", storefront: Storefront = Depends(get_storefront),
                       _: User = Depends(admin_user)):
        screen = ProductsAdmin(storefront).fetch()
        return respond(storefront, screen.render(screen.filtered(search)))

    @app.post("/admin/products")
    def create_product(payload: ProductForm, storefront: Storefront = Depends(get_storefront),
                       _: User = Depends(admin_user)):
        return respond(storefront, _save(ProductsAdmin(storefront), None, payload))

    @app.put("/admin/products/{product_id}")
    def edit_product(product_id: str, payload: ProductForm, storefront: Storefront = Depends(get_storefront),
                     _: User = Depends(admin_user)):
        return respond(storefront, _save(ProductsAdmin(storefront), product_id, payload))

    @app.post("/admin/products/{product_id}/toggle")
    def toggle_product(product_id: str, storefront: Storefront = Depends(get_storefront),
                       _: User = Depends(admin_user)):
        return respond(storefront, _toggle(ProductsAdmin(storefront), product_id))

    @app.delete("/admin/products/{product_id}")
    def delete_product(product_id: str, confirm: bool = Query(False), storefront: Storefront = Depends(get_storefront),
                       _: User = Depends(admin_user)):
        return respond(storefront, _delete(ProductsAdmin(storefront), product_id, confirm))

    # ---- orders ----
    @app.get("/admin/orders")
    def admin_orders(search: str = "", status: str = "all", storefront: Storefront = Depends(get_storefront),
                     _: User = Depends(admin_user)):
        screen = OrdersAdmin(storefront).fetch()
        return respond(storefront, screen.render(screen.filtered(search, status)))

    @app.get("/admin/orders/{order_id}")
    def order_details(order_id: str, storefront: Storefront = Depends(get_storefront),
                      _: User = Depends(admin_user)):
        order = OrdersAdmin(storefront).fetch().view_details(order_id)
        if order is None:
            raise HTTPException(status_code=404, detail="Order not found")
        return respond(storefront, {"order": order.model_dump(by_alias=True)})

    @app.post("/admin/orders/{order_id}/status")
    def update_order_status(order_id: str, payload: StatusChange, storefront: Storefront = Depends(get_storefront),
                            _: User = Depends(admin_user)):
        screen = OrdersAdmin(storefront).fetch()
        if screen.find(order_id) is None:
            raise HTTPException(status_code=404, detail="Order not found")
        updated = screen.update_status(order_id, payload.status)
        return respond(storefront, {"updated": updated, **screen.render()})

    # ---- menu items ----
    @app.get("/admin/menus")
    def admin_menus(storefront: Storefront = Depends(get_storefront), _: User = Depends(admin_user)):
        return respond(storefront, MenusAdmin(storefront).fetch().render())

    @app.post("/admin/menus")
    def create_menu_item(payload: MenuItemForm, storefront: Storefront = Depends(get_storefront),
                         _: User = Depends(admin_user)):
        return respond(storefront, _save(MenusAdmin(storefront), None, payload))

    @app.put("/admin/menus/{item_id}")
    def edit_menu_item(item_id: str, payload: MenuItemForm, storefront: Storefront = Depends(get_storefront),
                       _: User = Depends(admin_user)):
        return respond(storefront, _save(MenusAdmin(storefront), item_id, payload))

    @app.post("/admin/menus/{item_id}/toggle")
    def toggle_menu_item(item_id: str, storefront: Storefront = Depends(get_storefront),
                         _: User = Depends(admin_user)):
        return respond(storefront, _toggle(MenusAdmin(storefront), item_id))

    @app.delete("/admin/menus/{item_id}")
    def delete_menu_item(item_id: str, confirm: bool = Query(False), storefront: Storefront = Depends(get_storefront),
                         _: User = Depends(admin_user)):
        return respond(storefront, _delete(MenusAdmin(storefront), item_id, confirm))

    # ---- pages ----
    @app.get("/admin/pages")
    def admin_pages(storefront: Storefront = Depends(get_storefront), _: User = Depends(admin_user)):
        return respond(storefront, PagesAdmin(storefront).fetch().render())

    @app.post("/admin/pages")
    def create_page(payload: PageForm, storefront: Storefront = Depends(get_storefront),
                    _: User = Depends(admin_user)):
        return respond(storefront, _save(PagesAdmin(storefront), None, payload))

    @app.put("/admin/pages/{page_id}")
    def edit_page(page_id: str, payload: PageForm, storefront: Storefront = Depends(get_storefront),
                  _: User = Depends(admin_user)):
        return respond(storefront, _save(PagesAdmin(storefront), page_id, payload))

    @app.post("/admin/pages/{page_id}/toggle")
    def toggle_page(page_id: str, storefront: Storefront = Depends(get_storefront),
                    _: User = Depends(admin_user)):
        return respond(storefront, _toggle(PagesAdmin(storefront), page_id))

    @app.delete("/admin/pages/{page_id}")
    def delete_page(page_id: str, confirm: bool = Query(False), storefront: Storefront = Depends(get_storefront),
                    _: User = Depends(admin_user)):
        return respond(storefront, _delete(PagesAdmin(storefront), page_id, confirm))


# ===================== Admin helpers =====================
def _save(screen, item_id: Optional[str], payload) -> dict:
    screen.fetch()
    if item_id is None:
        screen.open_create()
    elif screen.open_edit(item_id) is None:
        raise HTTPException(status_code=404, detail=f"{screen.label} not found")
    screen.form = screen.form.model_copy(update=payload.model_dump(exclude_unset=True))
    saved = screen.submit()
    return {"saved": saved, "form": screen.form.model_dump(by_alias=True), **screen.render()}


def _toggle(screen, item_id: str) -> dict:
    screen.fetch()
    if screen.find(item_id) is None:
        raise HTTPException(status_code=404, detail=f"{screen.label} not found")
    return {"updated": screen.toggle(item_id), **screen.render()}


def _delete(screen, item_id: str, confirm: bool) -> dict:
    screen.fetch()
    return {"deleted": screen.delete(item_id, confirmed=confirm), **screen.render()}


app = create_app()


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=LOG_LEVEL, stream=sys.stdout)
    uvicorn.run(app, host="0.0.0.0", port=PORT)

"""
Session gate and application state.

`SessionGate` follows the auth stream and decides what may be rendered.
`Storefront` is the application-state container handed to every screen:
backend, auth, session, cart, checkout form, language and the toast collector.
`Sessions` keeps one `Storefront` per signed-in client.
"""
import logging
import threading
import uuid
from typing import Callable, Dict, Optional, Tuple

from auth import AuthClient, AuthError, AuthState, create_access_token, decode_access_token
from cart import CartStore
from catalog import QuantitySelector
from checkout import CheckoutFlow
from config import ADMIN_EMAIL
from content import DEFAULT_LANGUAGE, other_language
from database import Backend, BackendError
from notifications import Toaster
from schemas import User, Language
from storage import ScopedStorage

logger = logging.getLogger(__name__)

LOADING = "loading"
SIGNED_OUT = "signed_out"
READY = "ready"


class SessionGate:
    def __init__(self, auth: AuthClient):
        self.user: Optional[User] = None
        self.is_loading = True
        self._unsubscribe = auth.on_auth_state_changed(self._on_state)

    def _on_state(self, state: AuthState) -> None:
        self.user = state.user
        self.is_loading = state.is_loading

    @property
    def status(self) -> str:
        if self.is_loading:
            return LOADING
        if self.user is None:
            return SIGNED_OUT
        return READY

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


def shows_admin_link(user: User, path: str = "/", admin_email: str = ADMIN_EMAIL) -> bool:
    """Header affordance only; admin routes check `User.is_admin` themselves."""
    return user.email == admin_email or path.startswith("/admin")


class Storefront:
    def __init__(self, backend: Backend, storage, admin_email: str = ADMIN_EMAIL):
        self.backend = backend
        self.storage = storage
        self.admin_email = admin_email
        self.toaster = Toaster()
        self.language: Language = DEFAULT_LANGUAGE
        self.auth = AuthClient(backend, storage, admin_email=admin_email)
        self.session = SessionGate(self.auth)
        self.cart = CartStore(storage)
        self.quantities = QuantitySelector()
        self.checkout = CheckoutFlow(self)

    def start(self) -> None:
        self.auth.start()
        logger.info(f"Storefront started, session {self.session.status}")

    def close(self) -> None:
        self.session.close()

    def toggle_language(self) -> Language:
        self.language = other_language(self.language)
        return self.language


class Sessions:
    """Per-client storefronts, keyed by the session id carried in the access token."""

    def __init__(self, backend: Backend, storage, admin_email: str = ADMIN_EMAIL):
        self.backend = backend
        self.storage = storage
        self.admin_email = admin_email
        self._open: Dict[str, Storefront] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._open)

    def get(self, session_id: str) -> Storefront:
        """Open storefront for `session_id`, restoring it from storage when needed."""
        with self._lock:
            storefront = self._open.get(session_id)
            if storefront is None:
                storefront = Storefront(self.backend, ScopedStorage(self.storage, session_id), self.admin_email)
                storefront.start()
                self._open[session_id] = storefront
            return storefront

    def end(self, session_id: str) -> None:
        with self._lock:
            storefront = self._open.pop(session_id, None)
        if storefront is not None:
            storefront.close()
        ScopedStorage(self.storage, session_id).clear()

    def close_all(self) -> None:
        with self._lock:
            storefronts = list(self._open.values())
            self._open.clear()
        for storefront in storefronts:
            storefront.close()

    def _sign_in(self, sign_in: Callable[[AuthClient], User]) -> Tuple[Storefront, str]:
        session_id = uuid.uuid4().hex
        storefront = self.get(session_id)
        try:
            user = sign_in(storefront.auth)
        except (AuthError, BackendError):
            self.end(session_id)
            raise
        token = create_access_token({"sub": user.id, "sid": session_id})
        return storefront, token

    def signup(self, email: str, password: str, display_name: Optional[str] = None) -> Tuple[Storefront, str]:
        return self._sign_in(lambda auth: auth.signup(email, password, display_name))

    def login(self, email: str, password: str) -> Tuple[Storefront, str]:
        return self._sign_in(lambda auth: auth.login(email, password))

    def logout(self, token: str) -> None:
        """Sign the token's client out and forget its session."""
        session_id = decode_access_token(token)["sid"]
        self.get(session_id).auth.logout()
        self.end(session_id)

    def resolve(self, token: Optional[str]) -> Optional[Storefront]:
        """Storefront of the client holding `token`, or None when it is not signed in."""
        if not token:
            return None
        try:
            claims = decode_access_token(token)
        except AuthError as e:
            logger.warning(f"Rejected access token: {e}")
            return None
        storefront = self.get(claims["sid"])
        user = storefront.session.user
        if user is None:
            self.end(claims["sid"])
            return None
        if user.id != claims["sub"]:
            return None
        return storefront

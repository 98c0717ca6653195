"""
Auth client.

Keeps the signed-in user, pushes `AuthState` snapshots to subscribers and
resolves the current user for stamping rows. Accounts live in the `users`
collection with bcrypt password hashes. Clients prove which session they
belong to with a signed access token.
"""
import logging
import time
import random
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from config import ACCESS_TOKEN_EXPIRE_MINUTES, ADMIN_EMAIL, ALGORITHM, SECRET_KEY, SESSION_STORAGE_KEY
from database import Backend, BackendError
from schemas import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthError(Exception):
    pass


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Claims of a valid token; needs both `sub` (user id) and `sid` (session id)."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise AuthError("Could not validate credentials") from e
    if not payload.get("sub") or not payload.get("sid"):
        raise AuthError("Could not validate credentials")
    return payload


class AuthState(BaseModel):
    user: Optional[User] = None
    is_loading: bool = True


AuthListener = Callable[[AuthState], None]


class AuthClient:
    def __init__(self, backend: Backend, storage, admin_email: str = ADMIN_EMAIL):
        self.backend = backend
        self.storage = storage
        self.admin_email = admin_email
        self._state = AuthState()
        self._listeners: List[AuthListener] = []

    @property
    def state(self) -> AuthState:
        return self._state

    def on_auth_state_changed(self, callback: AuthListener) -> Callable[[], None]:
        """Subscribe to state snapshots; the current one is delivered right away."""
        self._listeners.append(callback)
        callback(self._state)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _emit(self, user: Optional[User], is_loading: bool = False) -> None:
        self._state = AuthState(user=user, is_loading=is_loading)
        for listener in list(self._listeners):
            listener(self._state)

    def start(self) -> None:
        """Restore a persisted session, then leave the loading phase."""
        user = None
        user_id = self.storage.get_item(SESSION_STORAGE_KEY)
        if user_id:
            try:
                rows = self.backend.users.list(where={"id": user_id}, limit=1)
            except BackendError as e:
                logger.error(f"Could not restore session for {user_id}: {e}")
                rows = []
            if rows:
                user = User.from_row(rows[0])
            else:
                self.storage.remove_item(SESSION_STORAGE_KEY)
        self._emit(user)

    def _find_by_email(self, email: str) -> Optional[dict]:
        rows = self.backend.users.list(where={"email": email}, limit=1)
        return rows[0] if rows else None

    def signup(self, email: str, password: str, display_name: Optional[str] = None) -> User:
        if self._find_by_email(email):
            raise AuthError("Email already registered")
        user_id = f"user_{int(time.time() * 1000)}_{random.randint(1000, 9999)}"
        self.backend.users.create({
            "id": user_id,
            "email": email,
            "display_name": display_name,
            "password_hash": pwd_context.hash(password),
            "is_admin": email == self.admin_email,
        })
        user = User(id=user_id, email=email, display_name=display_name, is_admin=email == self.admin_email)
        self._sign_in(user)
        return user

    def login(self, email: str, password: str) -> User:
        row = self._find_by_email(email)
        if not row or not pwd_context.verify(password, row["password_hash"]):
            raise AuthError("Invalid credentials")
        user = User.from_row(row)
        self._sign_in(user)
        return user

    def _sign_in(self, user: User) -> None:
        self.storage.set_item(SESSION_STORAGE_KEY, user.id)
        logger.info(f"Signed in {user.email}")
        self._emit(user)

    def logout(self) -> None:
        self.storage.remove_item(SESSION_STORAGE_KEY)
        self._emit(None)

    def me(self) -> User:
        if self._state.user is None:
            raise AuthError("Not signed in")
        return self._state.user

"""
Toast notifications.

Toasts are the only way screens report outcomes to the user. They are
collected here and handed to the client with the next response.
"""
from typing import List, Literal, Optional
from pydantic import BaseModel


class Toast(BaseModel):
    title: str
    description: Optional[str] = None
    variant: Literal["default", "destructive"] = "default"


class Toaster:
    def __init__(self):
        self._pending: List[Toast] = []

    def toast(self, title: str, description: Optional[str] = None, variant: str = "default") -> Toast:
        item = Toast(title=title, description=description, variant=variant)
        self._pending.append(item)
        return item

    def error(self, title: str, description: Optional[str] = None) -> Toast:
        return self.toast(title, description, variant="destructive")

    @property
    def pending(self) -> List[Toast]:
        return list(self._pending)

    def drain(self) -> List[dict]:
        items = [t.model_dump() for t in self._pending]
        self._pending.clear()
        return items

"""User-facing notices plus alert and confirmation dialog state."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar


class NoticeKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


NOTICE_TITLES = {
    NoticeKind.SUCCESS: "Success",
    NoticeKind.ERROR: "Error",
    NoticeKind.WARNING: "Warning",
}


@dataclass(frozen=True)
class Notice:
    kind: NoticeKind
    message: str

    @property
    def title(self) -> str:
        return NOTICE_TITLES[self.kind]


class NoticeBoard:
    """Collects notices and fans them out to subscribers (the view)."""

    def __init__(self):
        self.history: list[Notice] = []
        self._subscribers: list[Callable[[Notice], None]] = []

    def subscribe(self, callback: Callable[[Notice], None]):
        self._subscribers.append(callback)

    def emit(self, kind: NoticeKind, message: str) -> Notice:
        notice = Notice(kind, message)
        self.history.append(notice)
        for callback in list(self._subscribers):
            callback(notice)
        return notice

    def success(self, message: str) -> Notice:
        return self.emit(NoticeKind.SUCCESS, message)

    def error(self, message: str) -> Notice:
        return self.emit(NoticeKind.ERROR, message)

    def warning(self, message: str) -> Notice:
        return self.emit(NoticeKind.WARNING, message)

    @property
    def last(self) -> Optional[Notice]:
        return self.history[-1] if self.history else None


class AlertState:
    """Informational dialog: one notice at a time."""

    def __init__(self):
        self.open = False
        self.notice: Optional[Notice] = None

    def show(self, notice: Notice):
        self.notice = notice
        self.open = True

    def close(self):
        self.open = False


T = TypeVar("T")


class Confirmation(Generic[T]):
    """Yes/no dialog holding the payload awaiting confirmation."""

    def __init__(self):
        self.pending: Optional[T] = None

    @property
    def open(self) -> bool:
        return self.pending is not None

    def request(self, payload: T):
        self.pending = payload

    def take(self) -> Optional[T]:
        """Return the pending payload and clear it."""
        payload, self.pending = self.pending, None
        return payload

    def cancel(self):
        self.pending = None

"""Toast notifications surfaced to the shopper.

Toasts are fire-and-forget: the cart store never waits on them and a
toaster must not raise back into the store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Toast:
    level: str
    message: str


class Toaster(ABC):
    """Abstract toast sink."""

    @abstractmethod
    def success(self, message: str) -> None: ...

    @abstractmethod
    def error(self, message: str) -> None: ...


class LogToaster(Toaster):
    """Default sink: writes toasts to the structured log."""

    def success(self, message: str) -> None:
        logger.info("toast", toast_level="success", message=message)

    def error(self, message: str) -> None:
        logger.warning("toast", toast_level="error", message=message)


class MemoryToaster(Toaster):
    """Keeps every toast in memory, for tests and local development."""

    def __init__(self) -> None:
        self.toasts: list[Toast] = []

    def success(self, message: str) -> None:
        self.toasts.append(Toast(level="success", message=message))

    def error(self, message: str) -> None:
        self.toasts.append(Toast(level="error", message=message))

    @property
    def errors(self) -> list[str]:
        return [toast.message for toast in self.toasts if toast.level == "error"]

    def clear(self) -> None:
        self.toasts.clear()

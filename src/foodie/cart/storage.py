"""Storage backends for the client cart.

A backend stores one serialized value and tells every subscriber when it is
written, so all views sharing a backend see the same cart. There is no merge:
the last write wins.
"""

import os
import tempfile
from pathlib import Path

from foodie.utils.logging import get_logger

logger = get_logger(__name__)

CART_STORAGE_KEY = "food-delivery-cart"


class CartStorage:
    """Base class: subclasses implement ``read`` and ``_store``."""

    def __init__(self):
        self._listeners = []

    def read(self) -> str | None:
        raise NotImplementedError

    def _store(self, value: str) -> None:
        raise NotImplementedError

    def write(self, value: str) -> None:
        self._store(value)
        for listener in list(self._listeners):
            listener(value)

    def subscribe(self, listener):
        """Call ``listener(value)`` after every write. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


class MemoryCartStorage(CartStorage):
    def __init__(self, initial: str | None = None):
        super().__init__()
        self._value = initial

    def read(self) -> str | None:
        return self._value

    def _store(self, value: str) -> None:
        self._value = value


class FileCartStorage(CartStorage):
    """Keeps the cart in a JSON file, the local-storage equivalent for CLI clients.

    Writes go to a temporary file that is then renamed over the target, so a
    reader never sees a half-written cart.
    """

    def __init__(self, path):
        super().__init__()
        self.path = Path(path).expanduser()

    def read(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _store(self, value: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{CART_STORAGE_KEY}-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, self.path)
        except OSError:
            logger.error("cart_write_failed", path=str(self.path))
            Path(tmp_name).unlink(missing_ok=True)
            raise

"""Order tracking: poll an order until it is delivered.

``OrderTracker`` re-reads the order every ``poll_interval`` seconds. With
``auto_advance`` on it also asks the server to advance the order once per
observed status, ``simulate_delay`` seconds after that status was first
seen, which is how the demo storefront moves an order along without a
kitchen.
"""

import threading

from foodie.client.api import ApiError
from foodie.config import get_settings
from foodie.order.status import TERMINAL_STATUS, status_index
from foodie.utils.logging import get_logger

logger = get_logger(__name__)


class OrderTracker:
    def __init__(
        self,
        client,
        order_id,
        on_update=None,
        poll_interval=None,
        simulate_delay=None,
        auto_advance=True,
    ):
        settings = get_settings()
        self.client = client
        self.order_id = order_id
        self.on_update = on_update
        self.poll_interval = settings.poll_interval if poll_interval is None else poll_interval
        self.simulate_delay = settings.simulate_delay if simulate_delay is None else simulate_delay
        self.auto_advance = auto_advance

        self.order = None
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._delivered = threading.Event()
        self._poller = None
        self._timer = None
        self._armed_for = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc_info):
        self.stop()

    @property
    def status(self):
        return self.order["status"] if self.order else None

    def refresh(self):
        """Fetch the order once and react to its status."""
        order = self.client.get_order(self.order_id)
        with self._lock:
            # Status only moves forward; an older response lost a race with a newer one.
            if self.order is not None and status_index(order["status"]) < status_index(self.order["status"]):
                return self.order
            self.order = order
            self._on_status(order["status"])
        if self.on_update is not None:
            self.on_update(order)
        return order

    def _on_status(self, status):
        if status == TERMINAL_STATUS.value:
            self._cancel_timer()
            self._delivered.set()
            return
        if not self.auto_advance or self._stopped.is_set() or status == self._armed_for:
            return

        self._cancel_timer()
        self._armed_for = status
        self._timer = threading.Timer(self.simulate_delay, self._advance)
        self._timer.daemon = True
        self._timer.start()

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _advance(self):
        if self._stopped.is_set():
            return
        try:
            self.client.simulate_order_progress(self.order_id)
        except ApiError as exc:
            logger.warning("order_advance_failed", order_id=self.order_id, status_code=exc.status_code, error=exc.message)
            return
        self._safe_refresh()

    def _safe_refresh(self):
        try:
            self.refresh()
        except ApiError as exc:
            logger.warning("order_poll_failed", order_id=self.order_id, status_code=exc.status_code, error=exc.message)
        except Exception:
            logger.exception("order_poll_failed", order_id=self.order_id)

    def _poll(self):
        while not self._stopped.is_set():
            self._safe_refresh()
            if self._delivered.is_set():
                return
            self._stopped.wait(self.poll_interval)

    def start(self):
        if self._poller is not None:
            return
        self._stopped.clear()
        self._poller = threading.Thread(target=self._poll, name=f"order-tracker-{self.order_id}", daemon=True)
        self._poller.start()

    def stop(self):
        self._stopped.set()
        with self._lock:
            self._cancel_timer()
        if self._poller is not None and self._poller is not threading.current_thread():
            self._poller.join(timeout=self.poll_interval + 1)
        self._poller = None

    def wait_until_delivered(self, timeout=None) -> bool:
        return self._delivered.wait(timeout)

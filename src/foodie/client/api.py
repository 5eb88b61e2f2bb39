"""HTTP client for the FoodieExpress API.

Unwraps the ``{"success": true, "data": ...}`` envelope and raises
``ApiError`` for anything else. Payloads are plain dicts with the API's
camelCase keys.
"""

import httpx

from foodie.config import get_settings


class ApiError(Exception):
    def __init__(self, status_code, message, details=None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


class FoodieClient:
    def __init__(self, base_url=None, http=None, timeout=10.0):
        self._http = http or httpx.Client(base_url=base_url or get_settings().api_url, timeout=timeout)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._http.close()

    def _request(self, method, path, **kwargs):
        response = self._http.request(method, path, **kwargs)
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.is_error or not isinstance(payload, dict) or not payload.get("success"):
            error = payload.get("error") if isinstance(payload, dict) else None
            details = payload.get("details") if isinstance(payload, dict) else None
            raise ApiError(response.status_code, error or "Something went wrong", details)
        return payload.get("data")

    # --- Menu ---

    def get_menu(self, category=None) -> list[dict]:
        params = {"category": category} if category else None
        return self._request("GET", "/api/menu", params=params) or []

    def get_menu_item(self, menu_item_id) -> dict:
        return self._request("GET", f"/api/menu/{menu_item_id}")

    # --- Orders ---

    def create_order(self, order_request) -> dict:
        """Submit a ``PlaceOrderRequest`` (or an already camelCased dict)."""
        if hasattr(order_request, "model_dump"):
            order_request = order_request.model_dump(by_alias=True)
        return self._request("POST", "/api/orders", json=order_request)

    def list_orders(self) -> list[dict]:
        return self._request("GET", "/api/orders") or []

    def get_order(self, order_id) -> dict:
        return self._request("GET", f"/api/orders/{order_id}")

    def update_order_status(self, order_id, status) -> dict:
        status = getattr(status, "value", status)
        return self._request("PATCH", f"/api/orders/{order_id}/status", json={"status": status})

    def simulate_order_progress(self, order_id) -> dict:
        return self._request("POST", f"/api/orders/{order_id}/simulate")

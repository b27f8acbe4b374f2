# backend/vcnty/api_client.py
import requests
import structlog

from vcnty.config import settings
from vcnty.errors import BackendAPIError

logger = structlog.get_logger(__name__)


class VcntyClient:
    """
    Minimal client for the VCNTY backend API (stores / items).

    Every call is a single attempt: no retries and no timeout beyond what
    requests does by default. Any failure surfaces as BackendAPIError.
    """

    def __init__(self, base_url: str | None = None, session: requests.Session | None = None):
        self.base_url = (base_url or settings.VCNTY_API_URL).rstrip("/")
        self.session = session or requests.Session()

    def _headers(self, token: str | None) -> dict:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        # ngrok shows an HTML interstitial unless told not to
        if "ngrok" in self.base_url:
            headers["ngrok-skip-browser-warning"] = "true"
        return headers

    def request(self, method: str, endpoint: str, token: str | None = None, json=None, params=None):
        url = f"{self.base_url}{endpoint}"
        try:
            r = self.session.request(method, url, headers=self._headers(token), json=json, params=params)
        except requests.RequestException as e:
            logger.warning("vcnty_api_unreachable", method=method, endpoint=endpoint, error=str(e))
            raise BackendAPIError(str(e)) from e

        if not r.ok:
            try:
                body = r.json()
                message = (body.get("message") if isinstance(body, dict) else None) or "API request failed"
            except ValueError:
                message = "Request failed"
            logger.warning("vcnty_api_error", method=method, endpoint=endpoint, status=r.status_code, message=message)
            raise BackendAPIError(message, status_code=r.status_code)

        if r.status_code == 204 or not r.text:
            return {}
        try:
            return r.json()
        except ValueError as e:
            raise BackendAPIError(f"Invalid JSON from API: {e}", status_code=r.status_code) from e

    # ---- stores ----
    def get_store(self, store_id: str, token: str | None = None) -> dict:
        return self.request("GET", f"/stores/{store_id}", token=token)

    # ---- items ----
    def list_store_items(self, store_id: str, token: str | None = None, limit: int = 20, offset: int = 0):
        return self.request(
            "GET", f"/items/store/{store_id}", token=token,
            params={"limit": limit, "offset": offset},
        )

    def create_items_batch(self, store_id: str, items: list[dict], token: str | None = None):
        return self.request("POST", "/items/batch", token=token, json={"storeId": store_id, "items": items})

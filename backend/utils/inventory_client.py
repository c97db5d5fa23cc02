# backend/utils/inventory_client.py
import httpx
import logging
from pathlib import Path
from typing import Optional, Union

from config import settings

logger = logging.getLogger(__name__)

class InventoryClient:
    """Synchronous client for the /api/products endpoints.

    Pass an existing httpx.Client (e.g. FastAPI's TestClient) to reuse its
    transport; otherwise one is created for API_BASE_URL and owned here.
    """

    def __init__(self, base_url: Optional[str] = None, http: Optional[httpx.Client] = None, timeout: float = 30.0):
        self._owns_http = http is None
        self.http = http or httpx.Client(base_url=base_url or settings.API_BASE_URL, timeout=timeout)

    def close(self):
        if self._owns_http:
            self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        response = self.http.request(method, url, **kwargs)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Inventory API error: {method} {url} -> {e.response.status_code} {e.response.text}")
            raise
        return response

    def list_products(self, category: Optional[str] = None) -> list:
        params = {"category": category} if category else None
        return self._request("GET", "/api/products", params=params).json()

    def search_products(self, name: str) -> list:
        return self._request("GET", "/api/products/search", params={"name": name}).json()

    def update_product(self, product_id: int, data: dict) -> dict:
        return self._request("PUT", f"/api/products/{product_id}", json=data).json()

    def import_csv(self, source: Union[str, Path, bytes], filename: str = "products.csv") -> dict:
        content = source if isinstance(source, bytes) else Path(source).read_bytes()
        files = {"csvFile": (filename, content, "text/csv")}
        return self._request("POST", "/api/products/import", files=files).json()

    def export_csv(self) -> str:
        return self._request("GET", "/api/products/export").text

    def get_history(self, product_id: int) -> list:
        return self._request("GET", f"/api/products/{product_id}/history").json()

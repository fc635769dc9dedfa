# clients/python/curtain_wall_client.py
import requests
from typing import Dict, Any, Optional, List, Tuple


class CurtainWallClient:
    """
    Client for the Curtain Wall Designer API.

    This client wraps the design session endpoints (tool, clicks,
    merge/split, ratios, history) and quote pricing.

    Attributes:
        base_url: Base URL of the API
        headers: Headers to include in all requests
        timeout: Seconds to wait for each request
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 10.0
    ):
        """
        Initialize the client.

        Args:
            base_url: Base URL of the API (e.g., "http://localhost:8000")
            headers: Optional extra headers sent with every request
            timeout: Seconds to wait for each request
        """
        self.base_url = base_url.rstrip('/')
        self.headers = dict(headers or {})
        self.timeout = timeout

    def _design_url(self, design_id: str, suffix: str = "") -> str:
        return f"{self.base_url}/designs/{design_id}{suffix}"

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = requests.get(url, headers=self.headers, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def _post(self, url: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        response = requests.post(url, json=payload or {}, headers=self.headers, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def _put(self, url: str, payload: Dict[str, Any]) -> Any:
        response = requests.put(url, json=payload, headers=self.headers, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def check_connection(self) -> Tuple[bool, str]:
        """
        Check if the API is accessible.

        Returns:
            Tuple of (success, message)
        """
        try:
            response = requests.get(
                f"{self.base_url}/health",
                headers=self.headers,
                timeout=self.timeout
            )
            if response.status_code == 200:
                return True, "Connection successful"
            else:
                return False, f"API returned status code {response.status_code}"
        except requests.RequestException as e:
            return False, f"Connection error: {str(e)}"

    # Design sessions

    def create_design(
        self,
        columns: int = 4,
        rows: int = 3,
        width: float = 4.0,
        height: float = 3.0,
        preset: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Start a design session.

        Returns:
            Session state including its session_id

        Raises:
            requests.HTTPError: If the API request fails
        """
        payload = {"columns": columns, "rows": rows, "width": width, "height": height}
        if preset:
            payload["preset"] = preset
        return self._post(f"{self.base_url}/designs", payload)

    def get_design(self, design_id: str) -> Dict[str, Any]:
        return self._get(self._design_url(design_id))

    def list_designs(self, limit: int = 10, offset: int = 0) -> List[Dict[str, Any]]:
        return self._get(f"{self.base_url}/designs", params={"limit": limit, "offset": offset})

    def delete_design(self, design_id: str) -> None:
        response = requests.delete(
            self._design_url(design_id),
            headers=self.headers,
            timeout=self.timeout
        )
        response.raise_for_status()

    def apply_grid(
        self,
        design_id: str,
        columns: int,
        rows: int,
        width: Optional[float] = None,
        height: Optional[float] = None
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"columns": columns, "rows": rows}
        if width is not None:
            payload["width"] = width
        if height is not None:
            payload["height"] = height
        return self._post(self._design_url(design_id, "/grid"), payload)

    def set_tool(self, design_id: str, tool: str) -> Dict[str, Any]:
        return self._put(self._design_url(design_id, "/tool"), {"tool": tool})

    def click(self, design_id: str, row: int, col: int) -> Dict[str, Any]:
        """Click a cell; returns the cell after the click."""
        return self._post(self._design_url(design_id, f"/cells/{row}/{col}/click"))

    def merge(self, design_id: str, cell_ids: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Merge the current selection, or the given cell ids.

        Raises:
            requests.HTTPError: 409 if fewer than two cells are selected
        """
        payload = {"cell_ids": cell_ids} if cell_ids is not None else {}
        return self._post(self._design_url(design_id, "/merge"), payload)

    def split(self, design_id: str, cell_id: Optional[str] = None) -> Dict[str, Any]:
        payload = {"cell_id": cell_id} if cell_id is not None else {}
        return self._post(self._design_url(design_id, "/split"), payload)

    def set_ratio(self, design_id: str, axis: str, index: int, value: float) -> Dict[str, Any]:
        """
        Set a column or row weight.

        Args:
            axis: "columns" or "rows"
            index: Zero-based index
            value: New weight
        """
        return self._put(self._design_url(design_id, f"/ratios/{axis}/{index}"), {"value": value})

    def set_material(self, design_id: str, material: str) -> Dict[str, Any]:
        """Set the frame material: "aluminum", "steel" or "composite"."""
        return self._put(self._design_url(design_id, "/material"), {"material": material})

    def set_glass_type(self, design_id: str, glass_type: str) -> Dict[str, Any]:
        return self._put(self._design_url(design_id, "/glass-type"), {"glass_type": glass_type})

    def set_frame_color(self, design_id: str, color: str) -> Dict[str, Any]:
        """
        Set the frame color.

        Raises:
            requests.HTTPError: 400 unless the color looks like '#rrggbb'
        """
        return self._put(self._design_url(design_id, "/color"), {"color": color})

    def undo(self, design_id: str) -> Dict[str, Any]:
        return self._post(self._design_url(design_id, "/undo"))

    def redo(self, design_id: str) -> Dict[str, Any]:
        return self._post(self._design_url(design_id, "/redo"))

    def undo_last_merge(self, design_id: str) -> Dict[str, Any]:
        return self._post(self._design_url(design_id, "/undo-merge"))

    def get_summary(self, design_id: str) -> Dict[str, Any]:
        return self._get(self._design_url(design_id, "/summary"))

    def get_metrics(self, design_id: str) -> Dict[str, Any]:
        return self._get(self._design_url(design_id, "/metrics"))

    def get_cell_dimensions(self, design_id: str, row: int, col: int) -> Tuple[float, float]:
        data = self._get(self._design_url(design_id, f"/cells/{row}/{col}/dimensions"))
        return data["width"], data["height"]

    def list_presets(self) -> List[Dict[str, Any]]:
        return self._get(f"{self.base_url}/presets")

    # Quotes

    def price_quote(
        self,
        items: List[Dict[str, Any]],
        discount_percentage: float = 0.0
    ) -> Dict[str, Any]:
        """
        Price quote items and compute totals.

        Args:
            items: Quote items with camelCase keys
            discount_percentage: Discount on the total, 0-100

        Returns:
            Dictionary with priced "items" and "totals"

        Raises:
            requests.HTTPError: If the API request fails
        """
        return self._post(
            f"{self.base_url}/quotes/price",
            {"items": items, "discountPercentage": discount_percentage}
        )

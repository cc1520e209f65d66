"""Inventory service API (/api/inventory).

Items are full CRUD (replaced with PUT). Locations and suppliers are only
listed and created, so they are plain methods on the namespace.
"""

from typing import Any, Dict, List, Optional

from gateway.client import GatewayClient
from gateway.resource import Endpoint, Resource, join_path

BASE_PATH = "/api/inventory"


class InventoryApi(Endpoint):
    """Items, storage locations, suppliers and stock movements."""

    def __init__(self, client: GatewayClient):
        super().__init__(client, "inventory")
        self.items = Resource(client, f"{BASE_PATH}/items", "inventory item", update_method="PUT")

    async def get_low_stock_items(self) -> List[Dict[str, Any]]:
        """Items at or below their reorder point."""
        return await self.call("GET", join_path(BASE_PATH, "items", "low-stock"), "Failed to fetch low stock items")

    async def list_locations(self) -> List[Dict[str, Any]]:
        return await self.call("GET", join_path(BASE_PATH, "locations"), "Failed to fetch locations")

    async def get_locations_with_items(self) -> List[Dict[str, Any]]:
        """Locations with the items stocked at each."""
        return await self.call(
            "GET", join_path(BASE_PATH, "locations", "with-items"), "Failed to fetch locations with items"
        )

    async def create_location(self, data: Any) -> Dict[str, Any]:
        return await self.call("POST", join_path(BASE_PATH, "locations"), "Failed to create location", body=data)

    async def list_suppliers(self) -> List[Dict[str, Any]]:
        return await self.call("GET", join_path(BASE_PATH, "suppliers"), "Failed to fetch suppliers")

    async def create_supplier(self, data: Any) -> Dict[str, Any]:
        return await self.call("POST", join_path(BASE_PATH, "suppliers"), "Failed to create supplier", body=data)

    async def get_stats(self) -> Dict[str, Any]:
        return await self.call("GET", join_path(BASE_PATH, "stats"), "Failed to fetch inventory stats")

    async def get_recent_transactions(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return await self.call(
            "GET",
            join_path(BASE_PATH, "transactions", "recent"),
            "Failed to fetch recent transactions",
            params={"limit": limit},
        )

"""Asset service API (/api/assets)."""

from typing import Any, Dict, List, Optional

from gateway.client import GatewayClient
from gateway.resource import Resource


class AssetApi(Resource):
    """Assets and their hierarchy."""

    def __init__(self, client: GatewayClient):
        super().__init__(client, "/api/assets", "asset")

    async def list(
        self,
        status: Optional[str] = None,
        criticality: Optional[str] = None,
        type: Optional[str] = None,
        search: Optional[str] = None,
        **filters,
    ) -> List[Dict[str, Any]]:
        """Get all assets with optional filters."""
        return await super().list(status=status, criticality=criticality, type=type, search=search, **filters)

    async def get_hierarchy(self, asset_id: str) -> Dict[str, Any]:
        """Get the asset with its parent chain and children."""
        return await self.call("GET", self.item_path(asset_id, "hierarchy"), "Failed to fetch asset hierarchy")

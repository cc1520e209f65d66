"""Work order service API (/api/work-orders)."""

from typing import Any, Dict, List

from gateway.client import GatewayClient
from gateway.resource import Resource, join_path


class WorkOrderApi(Resource):
    """Work orders, plus dashboard stats and AI-prioritized queue."""

    def __init__(self, client: GatewayClient):
        super().__init__(client, "/api/work-orders", "work order")

    async def get_stats(self) -> Dict[str, Any]:
        """Counts by status (total, scheduled, in_progress, completed, overdue)."""
        return await self.call("GET", join_path(self.path, "stats"), "Failed to fetch work order stats")

    async def get_prioritized(self) -> List[Dict[str, Any]]:
        return await self.call("GET", join_path(self.path, "prioritized"), "Failed to fetch prioritized work orders")

    async def update_status(self, work_order_id: str, status: str) -> Dict[str, Any]:
        return await self.call(
            "PATCH",
            self.item_path(work_order_id),
            "Failed to update work order status",
            body={"status": status},
        )

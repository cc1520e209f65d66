"""Maintenance routes API (/api/routes).

A route is an ordered walk over assets. PM schedules can be assigned to a
route so that their work is generated along it.
"""

from typing import Any, Dict, List, Sequence

from gateway.client import GatewayClient
from gateway.resource import Resource, join_path


class RoutesApi(Resource):
    """Maintenance routes with their assets and PM schedule assignments."""

    def __init__(self, client: GatewayClient):
        super().__init__(client, "/api/routes", "route")

    async def get_stats(self) -> Dict[str, Any]:
        return await self.call("GET", join_path(self.path, "stats"), "Failed to fetch route stats")

    # Route assets

    async def list_assets(self, route_id: str) -> List[Dict[str, Any]]:
        return await self.call("GET", self.item_path(route_id, "assets"), "Failed to fetch route assets")

    async def add_asset(self, route_id: str, data: Any) -> Dict[str, Any]:
        return await self.call(
            "POST", self.item_path(route_id, "assets"), "Failed to add asset to route", body=data
        )

    async def update_asset(self, route_id: str, route_asset_id: str, data: Any) -> Dict[str, Any]:
        return await self.call(
            "PATCH",
            self.item_path(route_id, "assets", route_asset_id),
            "Failed to update route asset",
            body=data,
        )

    async def remove_asset(self, route_id: str, route_asset_id: str) -> Dict[str, Any]:
        return await self.call(
            "DELETE",
            self.item_path(route_id, "assets", route_asset_id),
            "Failed to remove asset from route",
        )

    async def reorder_assets(self, route_id: str, assets: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        """Set the walk order.

        Args:
            route_id: Route ID
            assets: Entries of the form ``{"id": ..., "sequence_order": ...}``
        """
        return await self.call(
            "POST",
            self.item_path(route_id, "assets", "reorder"),
            "Failed to reorder route assets",
            body={"assets": list(assets)},
        )

    # PM schedule assignments

    async def list_assignments(self, route_id: str) -> List[Dict[str, Any]]:
        return await self.call(
            "GET", self.item_path(route_id, "assignments"), "Failed to fetch route assignments"
        )

    async def assign_pm_schedule(self, route_id: str, schedule_id: str) -> Dict[str, Any]:
        return await self.call(
            "POST",
            self.item_path(route_id, "assignments"),
            "Failed to assign PM schedule to route",
            body={"schedule_id": schedule_id},
        )

    async def bulk_assign_pm_schedules(self, route_id: str, schedule_ids: Sequence[str]) -> Dict[str, Any]:
        return await self.call(
            "POST",
            self.item_path(route_id, "assignments", "bulk"),
            "Failed to assign PM schedules to route",
            body={"schedule_ids": list(schedule_ids)},
        )

    async def unassign_pm_schedule(self, route_id: str, schedule_id: str) -> Dict[str, Any]:
        return await self.call(
            "DELETE",
            self.item_path(route_id, "assignments", schedule_id),
            "Failed to unassign PM schedule from route",
        )

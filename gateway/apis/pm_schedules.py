"""PM schedule API (/api/work-orders/pm-schedules).

Preventive maintenance schedules with their materials, technician
assignments and completion history. Nested collections are listed and created
under ``/{schedule_id}/<collection>``. Materials are updated and deleted at
``/materials/{item_id}``; assignments are only deleted there, and history
entries are append-only.
"""

from typing import Any, Dict, List, Sequence

from gateway.client import GatewayClient
from gateway.resource import Resource, ScopedCollection, ScopedResource, join_path

BASE_PATH = "/api/work-orders/pm-schedules"


class PMScheduleAssignmentApi(ScopedCollection):
    """Technicians assigned to a schedule."""

    def __init__(self, client: GatewayClient):
        super().__init__(
            client,
            parent_path=BASE_PATH,
            collection="assignments",
            singular="PM schedule assignment",
        )

    async def bulk_update(self, schedule_id: str, person_ids: Sequence[str]) -> Dict[str, Any]:
        """Replace all assignments; the first person becomes the primary assignee."""
        return await self.call(
            "PUT",
            self.collection_path(schedule_id),
            "Failed to update assignments",
            body={"assignedPersonIds": list(person_ids)},
        )

    async def delete(self, assignment_id: str) -> Dict[str, Any]:
        return await self.call(
            "DELETE", join_path(BASE_PATH, "assignments", assignment_id), self.message("delete")
        )


class PMScheduleApi(Resource):
    """PM schedules."""

    def __init__(self, client: GatewayClient):
        super().__init__(client, BASE_PATH, "PM schedule")
        self.materials = ScopedResource(
            client,
            parent_path=BASE_PATH,
            collection="materials",
            item_path=f"{BASE_PATH}/materials",
            singular="PM schedule material",
        )
        self.assignments = PMScheduleAssignmentApi(client)
        self.history = ScopedCollection(
            client,
            parent_path=BASE_PATH,
            collection="history",
            singular="PM schedule history entry",
            plural="PM schedule history",
        )

    async def get_stats(self) -> Dict[str, Any]:
        return await self.call("GET", join_path(self.path, "stats"), "Failed to fetch PM schedule stats")

    async def get_by_asset(self, asset_id: str) -> List[Dict[str, Any]]:
        return await self.call(
            "GET", join_path(self.path, "by-asset", asset_id), "Failed to fetch PM schedules for asset"
        )

    async def generate_work_order(self, schedule_id: str) -> Dict[str, Any]:
        """Create a work order from the schedule and advance its next due date."""
        return await self.call(
            "POST", self.item_path(schedule_id, "generate-work-order"), "Failed to generate work order"
        )

    async def set_active(self, schedule_id: str, is_active: bool) -> Dict[str, Any]:
        """Pause (False) or resume (True) a schedule."""
        return await self.call(
            "POST",
            self.item_path(schedule_id, "pause"),
            "Failed to update PM schedule status",
            body={"is_active": is_active},
        )

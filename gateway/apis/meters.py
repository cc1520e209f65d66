"""Meters service API (/api/meters).

The meters service wraps every response in an envelope named after the
resource, e.g. ``{"meters": [...]}`` or ``{"group": {...}}``.
"""

from typing import Any, Dict

from gateway.client import GatewayClient
from gateway.resource import Resource, ScopedCollection, join_path

BASE_PATH = "/api/meters"


class MeterGroupAssignmentApi(ScopedCollection):
    """Assets assigned to a meter group; removed by assignment id."""

    def __init__(self, client: GatewayClient):
        super().__init__(
            client,
            parent_path=f"{BASE_PATH}/groups",
            collection="assignments",
            singular="meter group assignment",
            list_key="assignments",
            item_key="assignment",
        )

    async def delete(self, assignment_id: str) -> Dict[str, Any]:
        return await self.call(
            "DELETE", join_path(BASE_PATH, "assignments", assignment_id), self.message("delete")
        )


class MetersApi(Resource):
    """Meters, meter groups and group assignments.

    Usage:
        meters = await gateway.meters.list()
        group = await gateway.meters.groups.create({"name": "Pumps"})
        await gateway.meters.assignments.create(group["id"], {"asset_id": "a1"})
    """

    def __init__(self, client: GatewayClient):
        super().__init__(
            client,
            f"{BASE_PATH}/meters",
            "meter",
            list_key="meters",
            item_key="meter",
        )
        self.groups = Resource(
            client,
            f"{BASE_PATH}/groups",
            "meter group",
            list_key="groups",
            item_key="group",
        )
        self.assignments = MeterGroupAssignmentApi(client)

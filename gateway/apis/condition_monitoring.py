"""Condition monitoring API (/api/condition-monitoring)."""

from typing import Any, Dict, List, Optional

from gateway.client import GatewayClient
from gateway.resource import Collection, Endpoint, join_path

BASE_PATH = "/api/condition-monitoring"


class ConditionMonitoringApi(Endpoint):
    """Monitored assets, thresholds, alarms and KPIs."""

    def __init__(self, client: GatewayClient):
        super().__init__(client, "condition monitoring")
        self.thresholds = Collection(client, f"{BASE_PATH}/thresholds", "threshold", update_method="PUT")

    async def get_monitored_assets(self, **filters) -> List[Dict[str, Any]]:
        """Assets with IoT devices attached, with their current condition."""
        return await self.call(
            "GET", join_path(BASE_PATH, "assets"), "Failed to fetch monitored assets", params=filters
        )

    async def get_asset_condition_status(self, asset_id: str) -> Dict[str, Any]:
        return await self.call(
            "GET", join_path(BASE_PATH, "assets", asset_id, "status"), "Failed to fetch asset condition status"
        )

    async def get_alarms(self, **filters) -> List[Dict[str, Any]]:
        return await self.call("GET", join_path(BASE_PATH, "alarms"), "Failed to fetch alarms", params=filters)

    async def acknowledge_alarm(self, alarm_id: str, notes: Optional[str] = None) -> Dict[str, Any]:
        return await self.call(
            "POST",
            join_path(BASE_PATH, "alarms", alarm_id, "acknowledge"),
            "Failed to acknowledge alarm",
            body={"notes": notes},
        )

    async def resolve_alarm(self, alarm_id: str, notes: Optional[str] = None) -> Dict[str, Any]:
        return await self.call(
            "POST",
            join_path(BASE_PATH, "alarms", alarm_id, "resolve"),
            "Failed to resolve alarm",
            body={"notes": notes},
        )

    async def create_work_order_from_alarm(self, alarm_id: str, data: Any = None) -> Dict[str, Any]:
        """Raise a work order for the alarm.

        Returns ``{"alarm": ..., "work_order": ...}``. Title, description and
        priority default server-side from the alarm.
        """
        return await self.call(
            "POST",
            join_path(BASE_PATH, "alarms", alarm_id, "create-work-order"),
            "Failed to create work order from alarm",
            body=data if data is not None else {},
        )

    async def get_kpis(self) -> Dict[str, Any]:
        return await self.call("GET", join_path(BASE_PATH, "kpis"), "Failed to fetch condition monitoring KPIs")

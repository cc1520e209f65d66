"""Safety service API (/api/safety): incidents, precautions and CAPA."""

from typing import Any, Dict

from gateway.client import GatewayClient
from gateway.resource import Resource

BASE_PATH = "/api/safety"


class PrecautionApi(Resource):
    """Safety precaution library."""

    def __init__(self, client: GatewayClient):
        super().__init__(client, f"{BASE_PATH}/precautions", "precaution")

    async def increment_usage(self, precaution_id: str) -> Dict[str, Any]:
        """Bump the usage counter when a precaution is attached to work."""
        return await self.call(
            "POST", self.item_path(precaution_id, "increment-usage"), "Failed to update precaution usage"
        )


class SafetyApi:
    """Incidents, precautions and corrective/preventive actions (CAPA)."""

    def __init__(self, client: GatewayClient):
        self.incidents = Resource(client, f"{BASE_PATH}/incidents", "incident")
        self.precautions = PrecautionApi(client)
        self.capa = Resource(client, f"{BASE_PATH}/capa", "CAPA", plural="CAPAs")

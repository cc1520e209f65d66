"""Job plan API (/api/work-orders/job-plans).

Job plans are served by the work order service behind the gateway. Tasks,
parts and tools belong to a plan but are addressed on their own paths; the
plan id travels in the request body.
"""

from typing import Any, Dict

from gateway.client import GatewayClient
from gateway.resource import ChildResource, Resource, join_path

BASE_PATH = "/api/work-orders/job-plans"


class JobPlanApi(Resource):
    """Job plans with nested tasks, parts and tools."""

    def __init__(self, client: GatewayClient):
        super().__init__(client, BASE_PATH, "job plan")
        self.tasks = ChildResource(client, f"{BASE_PATH}/tasks", "task", parent_key="job_plan_id")
        self.parts = ChildResource(client, f"{BASE_PATH}/parts", "part", parent_key="job_plan_id")
        self.tools = ChildResource(client, f"{BASE_PATH}/tools", "tool", parent_key="job_plan_id")

    async def get_stats(self) -> Dict[str, Any]:
        return await self.call("GET", join_path(self.path, "stats"), "Failed to fetch job plan stats")

"""CMMS Gateway facade.

One object that owns the HTTP client and exposes every domain namespace.
"""

from typing import Any, Dict, Optional

import aiohttp

from core.observability.logging import get_logger
from gateway.apis import (
    AssetApi,
    ConditionMonitoringApi,
    InventoryApi,
    JobPlanApi,
    MetersApi,
    PeopleApi,
    PMScheduleApi,
    RoutesApi,
    SafetyApi,
    WorkflowApi,
    WorkOrderApi,
)
from gateway.auth import SessionProvider
from gateway.client import GatewayClient
from gateway.config import GatewayConfig

logger = get_logger(__name__)


class CMMSGateway:
    """Typed access to the CMMS backend through the API gateway.

    Usage:
        config = GatewayConfig.from_env()
        async with CMMSGateway(config, StaticSessionProvider(token, org_id)) as cmms:
            pumps = await cmms.assets.list(search="pump")
            await cmms.work_orders.update_status("wo1", "completed")
    """

    def __init__(
        self,
        config: GatewayConfig,
        session_provider: Optional[SessionProvider] = None,
        http_session: Optional[aiohttp.ClientSession] = None,
    ):
        self.config = config
        self.client = GatewayClient(config, session_provider, http_session=http_session)

        self.assets = AssetApi(self.client)
        self.work_orders = WorkOrderApi(self.client)
        self.inventory = InventoryApi(self.client)
        self.people = PeopleApi(self.client)
        self.safety = SafetyApi(self.client)
        self.job_plans = JobPlanApi(self.client)
        self.pm_schedules = PMScheduleApi(self.client)
        self.meters = MetersApi(self.client)
        self.routes = RoutesApi(self.client)
        self.workflow = WorkflowApi(self.client)
        self.condition_monitoring = ConditionMonitoringApi(self.client)

    @property
    def is_connected(self) -> bool:
        return self.client.is_connected

    async def connect(self) -> None:
        await self.client.connect()
        logger.info(f"Connected to CMMS gateway at {self.config.base_url}")

    async def disconnect(self) -> None:
        await self.client.disconnect()

    async def __aenter__(self) -> "CMMSGateway":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    async def health_check(self) -> Dict[str, Any]:
        """Gateway and downstream service health."""
        return await self.client.health_check()

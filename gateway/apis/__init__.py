"""Domain namespaces, one per backend resource family."""

from gateway.apis.assets import AssetApi
from gateway.apis.condition_monitoring import ConditionMonitoringApi
from gateway.apis.inventory import InventoryApi
from gateway.apis.job_plans import JobPlanApi
from gateway.apis.meters import MeterGroupAssignmentApi, MetersApi
from gateway.apis.people import PeopleApi
from gateway.apis.pm_schedules import PMScheduleApi, PMScheduleAssignmentApi
from gateway.apis.routes import RoutesApi
from gateway.apis.safety import PrecautionApi, SafetyApi
from gateway.apis.work_orders import WorkOrderApi
from gateway.apis.workflow import WorkflowApi, WorkflowTemplateApi

__all__ = [
    "AssetApi",
    "ConditionMonitoringApi",
    "InventoryApi",
    "JobPlanApi",
    "MeterGroupAssignmentApi",
    "MetersApi",
    "PeopleApi",
    "PMScheduleApi",
    "PMScheduleAssignmentApi",
    "RoutesApi",
    "PrecautionApi",
    "SafetyApi",
    "WorkOrderApi",
    "WorkflowApi",
    "WorkflowTemplateApi",
]

"""Core data models - shapes of the CMMS records behind the gateway.

The backend owns these entities; the models here only describe them so callers
can build typed request bodies.
"""

from core.models.entities import (
    # Base
    CMMSBaseModel,

    # Assets and work
    Asset,
    WorkOrder,
    JobPlan,
    PMSchedule,
    MaintenanceRoute,

    # Metering
    Meter,
    MeterGroup,

    # Inventory, safety, workflow
    InventoryItem,
    Incident,
    WorkflowTemplate,
)

__all__ = [
    "CMMSBaseModel",
    "Asset",
    "WorkOrder",
    "JobPlan",
    "PMSchedule",
    "MaintenanceRoute",
    "Meter",
    "MeterGroup",
    "InventoryItem",
    "Incident",
    "WorkflowTemplate",
]

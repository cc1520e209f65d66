"""CMMS entity models.

These models shape the records owned by the backend services behind the
gateway. Field names are the backend column names. Every field is optional so
the same model works as a create payload, a partial update or a parsed
response; unknown columns are kept.

They are separate from the wire layer in /gateway/: the client accepts them as
request bodies but always returns plain decoded JSON.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


# =============================================================================
# Base
# =============================================================================

class CMMSBaseModel(BaseModel):
    """Base model for gateway entities."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = None
    organization_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready request body: unset fields dropped, dates as ISO strings."""
        return self.model_dump(exclude_none=True, mode="json", by_alias=True)


# =============================================================================
# Assets
# =============================================================================

class Asset(CMMSBaseModel):
    """Physical asset.

    Maps to: /api/assets
    """
    name: Optional[str] = None
    asset_number: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    hierarchy_node_id: Optional[str] = None
    parent_asset_id: Optional[str] = None
    status: Optional[str] = None  # operational, maintenance, out_of_service, decommissioned
    health_score: Optional[float] = None
    criticality: Optional[str] = None  # low, medium, high, critical
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    purchase_date: Optional[date] = None
    last_maintenance_date: Optional[date] = None
    next_maintenance_date: Optional[date] = None
    qr_code_data: Optional[str] = None
    hierarchy_path: Optional[str] = None
    location: Optional[str] = None


# =============================================================================
# Work Management
# =============================================================================

class WorkOrder(CMMSBaseModel):
    """Work order.

    Maps to: /api/work-orders
    """
    asset_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    maintenance_type: Optional[str] = None  # preventive, corrective, predictive, emergency
    priority: Optional[str] = None
    scheduled_date: Optional[datetime] = None
    estimated_duration_hours: Optional[float] = None
    assigned_technician: Optional[str] = None
    status: Optional[str] = None  # scheduled, in_progress, completed, cancelled
    estimated_cost: Optional[float] = None
    notes: Optional[str] = None


class JobPlan(CMMSBaseModel):
    """Reusable job plan.

    Maps to: /api/work-orders/job-plans
    """
    job_plan_number: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    job_type: Optional[str] = None  # preventive, corrective, predictive, emergency, shutdown
    category: Optional[str] = None
    subcategory: Optional[str] = None
    estimated_duration_hours: Optional[float] = None
    skill_level_required: Optional[str] = None
    status: Optional[str] = None  # draft, active, inactive, archived
    version: Optional[str] = None
    applicable_asset_types: Optional[List[str]] = None
    frequency_type: Optional[str] = None
    frequency_interval: Optional[int] = None
    priority: Optional[str] = None
    cost_estimate: Optional[float] = None
    usage_count: Optional[int] = None


class PMSchedule(CMMSBaseModel):
    """Preventive maintenance schedule.

    Maps to: /api/work-orders/pm-schedules
    """
    schedule_number: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    asset_id: Optional[str] = None
    job_plan_id: Optional[str] = None
    frequency_type: Optional[str] = None  # daily, weekly, monthly, quarterly, yearly, custom
    frequency_value: Optional[int] = None
    frequency_unit: Optional[str] = None
    start_date: Optional[date] = None
    next_due_date: Optional[date] = None
    last_completed_date: Optional[date] = None
    lead_time_days: Optional[int] = None
    assigned_to: Optional[str] = None
    assigned_team_id: Optional[str] = None
    priority: Optional[str] = None
    estimated_duration_hours: Optional[float] = None
    is_active: Optional[bool] = None
    status: Optional[str] = None  # active, paused, suspended, completed
    auto_generate_wo: Optional[bool] = None
    notification_enabled: Optional[bool] = None
    safety_precaution_ids: Optional[List[str]] = None


class MaintenanceRoute(CMMSBaseModel):
    """Inspection / maintenance route.

    Maps to: /api/routes
    """
    route_number: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    route_type: Optional[str] = None
    status: Optional[str] = None
    is_optimized: Optional[bool] = None
    asset_count: Optional[int] = None


# =============================================================================
# Metering
# =============================================================================

class Meter(CMMSBaseModel):
    """Electrical / utility meter.

    Maps to: /api/meters/meters
    """
    meter_number: Optional[str] = None
    serial_number: Optional[str] = None
    description: Optional[str] = None
    meter_type: Optional[str] = None  # revenue, monitoring, protection, power_quality
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    accuracy_class: Optional[str] = None
    voltage_rating: Optional[float] = None
    current_rating: Optional[float] = None
    phase_type: Optional[str] = None  # single, three
    installation_date: Optional[date] = None
    installation_location: Optional[str] = None
    coordinates: Optional[Dict[str, float]] = None
    last_calibration_date: Optional[date] = None
    next_calibration_date: Optional[date] = None
    calibration_certificate_number: Optional[str] = None
    meter_constant: Optional[float] = None
    multiplier: Optional[float] = None
    status: Optional[str] = None  # active, inactive, faulty, retired
    unit_id: Optional[int] = None
    last_reading: Optional[float] = None
    last_reading_date: Optional[datetime] = None
    notes: Optional[str] = None


class MeterGroup(CMMSBaseModel):
    """Group of meters.

    Maps to: /api/meters/groups
    """
    group_number: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    group_type: Optional[str] = None  # revenue, monitoring, zone, feeder
    purpose: Optional[str] = None
    hierarchy_node_id: Optional[str] = None
    is_active: Optional[bool] = None


# =============================================================================
# Inventory, Safety, Workflow
# =============================================================================

class InventoryItem(CMMSBaseModel):
    """Stocked inventory item.

    Maps to: /api/inventory/items
    """
    item_number: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    unit_of_measure: Optional[str] = None
    barcode: Optional[str] = None
    current_stock: Optional[float] = None
    available_stock: Optional[float] = None
    reserved_stock: Optional[float] = None
    reorder_point: Optional[float] = None
    reorder_quantity: Optional[float] = None
    safety_stock: Optional[float] = None
    max_stock_level: Optional[float] = None
    unit_cost: Optional[float] = None
    average_cost: Optional[float] = None
    last_cost: Optional[float] = None
    supplier_id: Optional[str] = None
    is_serialized: Optional[bool] = None
    is_active: Optional[bool] = None
    lead_time_days: Optional[int] = None


class Incident(CMMSBaseModel):
    """Safety incident report.

    Maps to: /api/safety/incidents
    """
    incident_number: Optional[str] = None
    incident_date: Optional[datetime] = None
    location: Optional[str] = None
    severity: Optional[str] = None  # low, medium, high, critical
    status: Optional[str] = None  # reported, investigating, resolved, closed
    title: Optional[str] = None
    description: Optional[str] = None
    root_cause: Optional[str] = None
    corrective_actions: Optional[str] = None
    reporter_name: Optional[str] = None
    reporter_email: Optional[str] = None
    investigator_name: Optional[str] = None
    investigation_notes: Optional[str] = None
    cost_estimate: Optional[float] = None
    regulatory_reporting_required: Optional[bool] = None
    regulatory_report_number: Optional[str] = None
    asset_id: Optional[str] = None


class WorkflowTemplate(CMMSBaseModel):
    """Approval workflow template for a module (e.g. work orders).

    Maps to: /api/workflow/templates
    """
    name: Optional[str] = None
    description: Optional[str] = None
    module: Optional[str] = None
    is_active: Optional[bool] = None
    is_default: Optional[bool] = None
    version: Optional[int] = None
    created_by: Optional[str] = None

"""Approval workflow API (/api/workflow).

Templates define the approval steps for a module (work orders, incidents).
The state endpoints drive one entity through its template. Action bodies use
the workflow service's camelCase keys.
"""

from typing import Any, Dict, List, Optional, Sequence

from gateway.client import GatewayClient
from gateway.resource import Endpoint, Resource, ScopedResource, join_path

BASE_PATH = "/api/workflow"


def _action_body(**fields: Any) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


class WorkflowTemplateApi(Resource):
    """Workflow templates."""

    def __init__(self, client: GatewayClient):
        super().__init__(client, f"{BASE_PATH}/templates", "workflow template")

    async def list(self, module: Optional[str] = None, **filters) -> List[Dict[str, Any]]:
        return await super().list(module=module, **filters)

    async def set_default(self, template_id: str) -> Dict[str, Any]:
        """Make the template the module's default."""
        return await self.call(
            "POST", self.item_path(template_id, "set-default"), "Failed to set default workflow template"
        )


class WorkflowApi(Endpoint):
    """Templates, steps and per-entity workflow state.

    Usage:
        await gateway.workflow.initialize("work_order", "wo1")
        state = await gateway.workflow.get_state("work_order", "wo1")
        await gateway.workflow.approve("work_order", "wo1", next_step_id, comments="ok")
    """

    def __init__(self, client: GatewayClient):
        super().__init__(client, "workflow")
        self.templates = WorkflowTemplateApi(client)
        self.steps = ScopedResource(
            client,
            parent_path=f"{BASE_PATH}/templates",
            collection="steps",
            item_path=f"{BASE_PATH}/steps",
            singular="workflow step",
        )

    # Step roles

    async def get_step_roles(self, step_id: str) -> List[Dict[str, Any]]:
        return await self.call(
            "GET", join_path(BASE_PATH, "steps", step_id, "roles"), "Failed to fetch workflow step roles"
        )

    async def set_step_roles(self, step_id: str, roles: Any) -> Dict[str, Any]:
        """Upsert a role assignment (role_name plus can_approve/can_reject/can_assign/can_edit)."""
        return await self.call(
            "POST",
            join_path(BASE_PATH, "steps", step_id, "roles"),
            "Failed to update workflow step roles",
            body=roles,
        )

    # Workflow state

    async def initialize(
        self, entity_type: str, entity_id: str, organization_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Start the default workflow for an entity."""
        return await self.call(
            "POST",
            join_path(BASE_PATH, "initialize"),
            "Failed to initialize workflow",
            body=_action_body(entityType=entity_type, entityId=entity_id, organizationId=organization_id),
        )

    async def get_state(self, entity_type: str, entity_id: str) -> Dict[str, Any]:
        return await self.call(
            "GET", join_path(BASE_PATH, "state", entity_type, entity_id), "Failed to fetch workflow state"
        )

    async def transition(
        self, entity_type: str, entity_id: str, target_step_id: str, comments: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self.call(
            "POST",
            join_path(BASE_PATH, "transition"),
            "Failed to transition workflow",
            body=_action_body(
                entityType=entity_type, entityId=entity_id, targetStepId=target_step_id, comments=comments
            ),
        )

    async def approve(
        self, entity_type: str, entity_id: str, target_step_id: str, comments: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self.call(
            "POST",
            join_path(BASE_PATH, "approve"),
            "Failed to approve workflow step",
            body=_action_body(
                entityType=entity_type, entityId=entity_id, targetStepId=target_step_id, comments=comments
            ),
        )

    async def reject(
        self, entity_type: str, entity_id: str, rejection_step_id: str, comments: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self.call(
            "POST",
            join_path(BASE_PATH, "reject"),
            "Failed to reject workflow step",
            body=_action_body(
                entityType=entity_type, entityId=entity_id, rejectionStepId=rejection_step_id, comments=comments
            ),
        )

    async def reassign(self, entity_type: str, entity_id: str, assigned_to_user_id: str) -> Dict[str, Any]:
        return await self.call(
            "POST",
            join_path(BASE_PATH, "reassign"),
            "Failed to reassign workflow step",
            body=_action_body(entityType=entity_type, entityId=entity_id, assignedToUserId=assigned_to_user_id),
        )

    # Reporting

    async def get_analytics(self, organization_id: str) -> Dict[str, Any]:
        return await self.call(
            "GET", join_path(BASE_PATH, "analytics", organization_id), "Failed to fetch workflow analytics"
        )

    async def get_status(self, module: str) -> Dict[str, Any]:
        return await self.call(
            "GET", join_path(BASE_PATH, "status", module), "Failed to fetch workflow status"
        )

    async def bulk_initialize(
        self, entity_type: str, entity_ids: Sequence[str], organization_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Initialize workflows for many entities; per-entity outcomes are in ``results``."""
        return await self.call(
            "POST",
            join_path(BASE_PATH, "bulk-initialize"),
            "Failed to initialize workflows",
            body=_action_body(entityType=entity_type, entityIds=list(entity_ids), organizationId=organization_id),
        )

"""Generic resource endpoints.

Every domain namespace is assembled from these endpoint shapes:

- ``Resource``: full CRUD on ``path`` and ``path/{id}``
- ``Collection``: a ``Resource`` without the single-record read
- ``ScopedCollection``: list/create under a parent
  (``parent_path/{parent_id}/collection``)
- ``ScopedResource``: a ``ScopedCollection`` plus update/delete on a flat
  item path
- ``ChildResource``: create on ``path`` with the parent id in the body,
  update/delete on ``path/{id}``

A shape only carries the operations the backing service routes; services
that route fewer subclass a narrower shape and add what they have.

Error messages are derived from the singular/plural names, e.g.
"Failed to fetch assets" / "Failed to fetch asset" / "Failed to create asset".
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

from gateway.client import GatewayClient, serialize_body


def unwrap(body: Any, key: Optional[str]) -> Any:
    """Strip a ``{key: ...}`` envelope when present; otherwise return the body."""
    if key and isinstance(body, dict) and key in body:
        return body[key]
    return body


def join_path(base: str, *segments: Any) -> str:
    """Append URL-quoted segments to a base path."""
    parts = [base.rstrip("/")]
    parts.extend(quote(str(segment), safe="") for segment in segments)
    return "/".join(parts)


class Endpoint:
    """Shared plumbing: naming, messages and the call into the client."""

    def __init__(self, client: GatewayClient, singular: str, plural: Optional[str] = None):
        self.client = client
        self.singular = singular
        self.plural = plural or f"{singular}s"

    def message(self, action: str, plural: bool = False) -> str:
        return f"Failed to {action} {self.plural if plural else self.singular}"

    async def call(
        self,
        method: str,
        path: str,
        error_message: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        unwrap_key: Optional[str] = None,
    ) -> Any:
        data = await self.client.request(
            method,
            path,
            body=body,
            params=params,
            resource=self.singular,
            error_message=error_message,
        )
        return unwrap(data, unwrap_key)


class Collection(Endpoint):
    """List, create, update and delete for one resource collection.

    Usage:
        thresholds = Collection(client, "/api/condition-monitoring/thresholds", "threshold", update_method="PUT")
        await thresholds.update("th1", {"critical_max": 95})
    """

    def __init__(
        self,
        client: GatewayClient,
        path: str,
        singular: str,
        plural: Optional[str] = None,
        list_key: Optional[str] = None,
        item_key: Optional[str] = None,
        update_method: str = "PATCH",
    ):
        """
        Args:
            client: Gateway client
            path: Collection path (e.g. "/api/assets")
            singular: Resource name used in messages (e.g. "asset")
            plural: Plural for list messages (default: singular + "s")
            list_key: Envelope key of list responses (e.g. "meters")
            item_key: Envelope key of single-item responses (e.g. "meter")
            update_method: PATCH or PUT, depending on the backing service
        """
        super().__init__(client, singular, plural)
        self.path = path.rstrip("/")
        self.list_key = list_key
        self.item_key = item_key
        self.update_method = update_method

    def item_path(self, resource_id: str, *segments: Any) -> str:
        return join_path(self.path, resource_id, *segments)

    async def list(self, **filters) -> List[Dict[str, Any]]:
        return await self.call(
            "GET", self.path, self.message("fetch", plural=True),
            params=filters, unwrap_key=self.list_key,
        )

    async def create(self, data: Any) -> Dict[str, Any]:
        return await self.call(
            "POST", self.path, self.message("create"),
            body=data, unwrap_key=self.item_key,
        )

    async def update(self, resource_id: str, data: Any) -> Dict[str, Any]:
        return await self.call(
            self.update_method, self.item_path(resource_id), self.message("update"),
            body=data, unwrap_key=self.item_key,
        )

    async def delete(self, resource_id: str) -> Dict[str, Any]:
        return await self.call("DELETE", self.item_path(resource_id), self.message("delete"))


class Resource(Collection):
    """CRUD endpoints for one resource collection.

    Usage:
        assets = Resource(client, "/api/assets", "asset")
        await assets.list(status="operational")
        await assets.get("a1")
    """

    async def get(self, resource_id: str) -> Dict[str, Any]:
        return await self.call(
            "GET", self.item_path(resource_id), self.message("fetch"),
            unwrap_key=self.item_key,
        )


class ScopedCollection(Endpoint):
    """A collection listed and created under a parent record.

    E.g. PM schedule history: ``GET/POST /pm-schedules/{id}/history``.
    """

    def __init__(
        self,
        client: GatewayClient,
        parent_path: str,
        collection: str,
        singular: str,
        plural: Optional[str] = None,
        list_key: Optional[str] = None,
        item_key: Optional[str] = None,
    ):
        super().__init__(client, singular, plural)
        self.parent_path = parent_path.rstrip("/")
        self.collection = collection
        self.list_key = list_key
        self.item_key = item_key

    def collection_path(self, parent_id: str) -> str:
        return join_path(self.parent_path, parent_id, self.collection)

    async def list(self, parent_id: str, **filters) -> List[Dict[str, Any]]:
        return await self.call(
            "GET", self.collection_path(parent_id), self.message("fetch", plural=True),
            params=filters, unwrap_key=self.list_key,
        )

    async def create(self, parent_id: str, data: Any) -> Dict[str, Any]:
        return await self.call(
            "POST", self.collection_path(parent_id), self.message("create"),
            body=data, unwrap_key=self.item_key,
        )


class ScopedResource(ScopedCollection):
    """A scoped collection whose records are updated and deleted on a flat path.

    E.g. PM schedule materials: ``GET/POST /pm-schedules/{id}/materials``,
    ``PATCH/DELETE /pm-schedules/materials/{material_id}``.
    """

    def __init__(
        self,
        client: GatewayClient,
        parent_path: str,
        collection: str,
        item_path: str,
        singular: str,
        plural: Optional[str] = None,
        list_key: Optional[str] = None,
        item_key: Optional[str] = None,
        update_method: str = "PATCH",
    ):
        super().__init__(client, parent_path, collection, singular, plural, list_key, item_key)
        self.base_item_path = item_path.rstrip("/")
        self.update_method = update_method

    async def update(self, item_id: str, data: Any) -> Dict[str, Any]:
        return await self.call(
            self.update_method, join_path(self.base_item_path, item_id), self.message("update"),
            body=data, unwrap_key=self.item_key,
        )

    async def delete(self, item_id: str) -> Dict[str, Any]:
        return await self.call("DELETE", join_path(self.base_item_path, item_id), self.message("delete"))


class ChildResource(Endpoint):
    """Records owned by a parent but addressed on their own path.

    E.g. job plan tasks: ``POST /job-plans/tasks`` with ``job_plan_id`` in the
    body, ``PATCH/DELETE /job-plans/tasks/{task_id}``.
    """

    def __init__(
        self,
        client: GatewayClient,
        path: str,
        singular: str,
        parent_key: str,
        plural: Optional[str] = None,
        update_method: str = "PATCH",
    ):
        super().__init__(client, singular, plural)
        self.path = path.rstrip("/")
        self.parent_key = parent_key
        self.update_method = update_method

    async def create(self, parent_id: str, data: Any = None) -> Dict[str, Any]:
        payload = serialize_body(data) if data is not None else {}
        if not isinstance(payload, dict):
            raise ValueError(f"{self.singular} data must be a mapping or model, got {type(payload).__name__}")
        body = dict(payload)
        body[self.parent_key] = parent_id
        return await self.call("POST", self.path, self.message("create"), body=body)

    async def update(self, item_id: str, data: Any) -> Dict[str, Any]:
        return await self.call(
            self.update_method, join_path(self.path, item_id), self.message("update"), body=data,
        )

    async def delete(self, item_id: str) -> Dict[str, Any]:
        return await self.call("DELETE", join_path(self.path, item_id), self.message("delete"))

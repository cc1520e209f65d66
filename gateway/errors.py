"""Gateway client errors."""

from typing import Optional


class RequestFailed(Exception):
    """A gateway call did not produce a 2xx JSON response.

    Raised for non-2xx statuses, transport failures and timeouts alike. The
    message is the fixed, human-readable text of the call site (e.g.
    "Failed to fetch asset"); the response body is kept raw and never parsed.

    Attributes:
        resource: Domain resource the call targeted (e.g. "asset")
        status_code: HTTP status, or None when no response was received
        response_body: Raw response text, if any
        method: HTTP method of the call
        path: Path suffix of the call (e.g. "/api/assets/a1")
    """

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        status_code: Optional[int] = None,
        response_body: str = "",
        method: Optional[str] = None,
        path: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.resource = resource
        self.status_code = status_code
        self.response_body = response_body
        self.method = method
        self.path = path

    def __repr__(self) -> str:
        return (
            f"RequestFailed({self.message!r}, resource={self.resource!r}, "
            f"status_code={self.status_code!r}, method={self.method!r}, path={self.path!r})"
        )

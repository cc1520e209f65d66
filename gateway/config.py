"""Gateway client configuration.

Configuration is passed in at client construction; nothing here is a global
endpoint constant. ``GatewayConfig.from_env()`` reads the usual deployment
variables (and a ``.env`` file next to the project, when present).
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    The default performs no retries: every call is fire-once unless a caller
    opts in with ``max_retries > 0``.
    """
    max_retries: int = 0
    base_delay: float = 0.5  # seconds
    max_delay: float = 30.0  # seconds
    exponential_base: float = 2.0
    retry_on_status: Tuple[int, ...] = (429, 500, 502, 503, 504)
    # No idempotency key is sent, so POST/PATCH are not replayed by default
    retry_methods: Tuple[str, ...] = ("GET", "PUT", "DELETE")

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("retry delays must be >= 0")

    def get_delay(self, attempt: int) -> float:
        """Calculate delay for retry attempt (exponential backoff)."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        return min(delay, self.max_delay)

    def should_retry(self, method: str, attempt: int, status_code: Optional[int] = None) -> bool:
        """Whether a failed attempt (0-based) may be retried.

        ``status_code`` is None for transport failures.
        """
        if attempt >= self.max_retries:
            return False
        if method.upper() not in self.retry_methods:
            return False
        return status_code is None or status_code in self.retry_on_status


@dataclass
class GatewayConfig:
    """Configuration for the CMMS gateway client.

    Attributes:
        base_url: Gateway endpoint; every domain path is appended to it
        timeout_seconds: Total per-request timeout, None disables it
        retry_config: Retry policy (off by default)
        send_organization_header: Send x-organization-id when the session has one
        send_correlation_header: Send x-correlation-id when one is in context
    """
    base_url: str
    timeout_seconds: Optional[float] = 30.0
    retry_config: RetryConfig = field(default_factory=RetryConfig)
    send_organization_header: bool = True
    send_correlation_header: bool = True

    def __post_init__(self):
        if not self.base_url or not self.base_url.strip():
            raise ValueError("base_url must be set")
        self.base_url = self.base_url.strip().rstrip("/")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive (or None)")

    def build_url(self, path: str) -> str:
        """Get the full URL for a path suffix like ``/api/assets``."""
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "GatewayConfig":
        """Build configuration from environment variables.

        Reads:
        - CMMS_GATEWAY_URL: Gateway base URL (required)
        - CMMS_GATEWAY_TIMEOUT: Timeout in seconds (default 30, "0" disables)
        - CMMS_GATEWAY_MAX_RETRIES: Retry attempts (default 0)
        - CMMS_GATEWAY_RETRY_BASE_DELAY: First backoff delay in seconds (default 0.5)

        Raises:
            ValueError: If CMMS_GATEWAY_URL is missing
        """
        env_path = env_file or Path.cwd() / ".env"
        if env_path.exists():
            load_dotenv(env_path)

        base_url = os.getenv("CMMS_GATEWAY_URL")
        if not base_url:
            raise ValueError(
                "CMMS_GATEWAY_URL environment variable not set. "
                "Set to your gateway endpoint (e.g., 'https://<project>.supabase.co/functions/v1/api-gateway')"
            )

        timeout = float(os.getenv("CMMS_GATEWAY_TIMEOUT", "30"))

        return cls(
            base_url=base_url,
            timeout_seconds=timeout if timeout > 0 else None,
            retry_config=RetryConfig(
                max_retries=int(os.getenv("CMMS_GATEWAY_MAX_RETRIES", "0")),
                base_delay=float(os.getenv("CMMS_GATEWAY_RETRY_BASE_DELAY", "0.5")),
            ),
        )

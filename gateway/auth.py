"""Session providers for the CMMS gateway.

The gateway authenticates callers with a Supabase-issued JWT. The client only
needs two things from the session: the bearer token and the active
organization. Providers supply both; the gateway client never stores them.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import aiohttp

from core.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Session:
    """Authenticated session with expiration tracking."""
    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    user_id: Optional[str] = None
    organization_id: Optional[str] = None
    obtained_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def expires_at(self) -> Optional[datetime]:
        """When the access token expires (None if unknown)."""
        if self.expires_in is None:
            return None
        return self.obtained_at + timedelta(seconds=self.expires_in)

    def is_expired(self, buffer_seconds: int = 60) -> bool:
        """Check if the access token is expired or will expire soon."""
        expires_at = self.expires_at
        if expires_at is None:
            return False
        return datetime.utcnow() >= (expires_at - timedelta(seconds=buffer_seconds))

    @property
    def authorization_header(self) -> str:
        """Get the Authorization header value."""
        return f"Bearer {self.access_token}"


class SessionProvider(ABC):
    """Supplies the current session to the gateway client."""

    @abstractmethod
    async def get_session(self) -> Optional[Session]:
        """Return the current session, or None when signed out."""
        pass

    async def get_access_token(self) -> Optional[str]:
        session = await self.get_session()
        return session.access_token if session else None


class StaticSessionProvider(SessionProvider):
    """Fixed token provider for scripts, service accounts and tests.

    Usage:
        provider = StaticSessionProvider("eyJhbGciOi...", organization_id="org-1")
    """

    def __init__(self, access_token: Optional[str] = None, organization_id: Optional[str] = None):
        self._session = Session(access_token=access_token, organization_id=organization_id) if access_token else None

    async def get_session(self) -> Optional[Session]:
        return self._session


@dataclass
class SupabaseAuthConfig:
    """Configuration for the Supabase auth server.

    Attributes:
        url: Project URL (e.g. "https://<project>.supabase.co")
        anon_key: Public anon key, sent as the ``apikey`` header
        expiry_buffer_seconds: Refresh this long before the token expires
    """
    url: str
    anon_key: str
    expiry_buffer_seconds: int = 60
    timeout_seconds: float = 30.0

    @property
    def token_endpoint(self) -> str:
        """Get the GoTrue token endpoint."""
        return f"{self.url.rstrip('/')}/auth/v1/token"


class SupabaseSessionProvider(SessionProvider):
    """Session provider backed by Supabase auth.

    Handles:
    - Password sign-in
    - Refresh of expired access tokens via the refresh token
    - Active organization switching

    Usage:
        auth = SupabaseSessionProvider(SupabaseAuthConfig(url, anon_key))
        await auth.sign_in_with_password("tech@example.com", "secret")
        auth.set_organization("org-1")
    """

    def __init__(self, config: SupabaseAuthConfig, session: Optional[Session] = None):
        self.config = config
        self._session = session
        self._refresh_lock = asyncio.Lock()

    @property
    def session(self) -> Optional[Session]:
        return self._session

    def set_organization(self, organization_id: Optional[str]) -> None:
        """Switch the active organization for subsequent requests."""
        if self._session:
            self._session.organization_id = organization_id

    def sign_out(self) -> None:
        self._session = None

    async def sign_in_with_password(self, email: str, password: str) -> bool:
        """Sign in and store the resulting session.

        Returns:
            True if sign-in succeeded
        """
        session = await self._request_token("password", {"email": email, "password": password})
        if session is None:
            return False
        self._session = session
        return True

    async def get_session(self) -> Optional[Session]:
        """Return the current session, refreshing it first if it has expired."""
        if self._session is None:
            return None
        if not self._session.is_expired(self.config.expiry_buffer_seconds):
            return self._session

        async with self._refresh_lock:
            # Another task may have refreshed while we waited
            if self._session and self._session.is_expired(self.config.expiry_buffer_seconds):
                await self._refresh()
        return self._session

    async def _refresh(self) -> None:
        current = self._session
        if current is None:
            return
        if not current.refresh_token:
            logger.warning("Session expired and no refresh token is available")
            self._session = None
            return

        refreshed = await self._request_token("refresh_token", {"refresh_token": current.refresh_token})
        if refreshed is None:
            self._session = None
            return
        # The active organization is a client-side choice; keep it across refreshes
        refreshed.organization_id = current.organization_id
        self._session = refreshed

    async def _request_token(self, grant_type: str, payload: Dict[str, Any]) -> Optional[Session]:
        """Call the token endpoint for the given grant type."""
        headers = {
            "apikey": self.config.anon_key,
            "Content-Type": "application/json",
        }
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as http:
                async with http.post(
                    self.config.token_endpoint,
                    params={"grant_type": grant_type},
                    json=payload,
                    headers=headers,
                ) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.warning(
                            f"Token request failed: {response.status}",
                            extra_fields={"grant_type": grant_type, "response": error_text[:200]},
                        )
                        return None
                    token_data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"Token request failed: {type(e).__name__}: {e}", extra_fields={"grant_type": grant_type})
            return None

        if not isinstance(token_data, dict) or not token_data.get("access_token"):
            logger.warning("Token response has no access_token", extra_fields={"grant_type": grant_type})
            return None

        user = token_data.get("user") or {}
        return Session(
            access_token=token_data["access_token"],
            token_type=token_data.get("token_type", "bearer"),
            expires_in=token_data.get("expires_in", 3600),
            refresh_token=token_data.get("refresh_token"),
            user_id=user.get("id"),
        )

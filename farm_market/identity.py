"""Bearer-token identity verification against the hosted identity provider.

Responsibilities:
- Verify access tokens, either locally (HS256 JWT signed with the provider's project secret)
  or by asking the provider's `/auth/v1/user` endpoint.
- Create accounts through the provider admin API for signup; tokens themselves are always
  issued by the provider.
- Expose FastAPI dependencies resolving the caller identity, the caller profile and the
  admin gate.
"""

import logging
from typing import Any, Dict, Optional

import requests
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from farm_market.core.config import settings
from farm_market.core.exceptions import (
    AdminRequiredException,
    ExternalServiceException,
    InvalidTokenException,
    UnauthenticatedException,
    ValidationException,
)
from farm_market.core.logging_config import bind_user
from farm_market.core.storage import KeyValueStore, get_store
from farm_market.modules.users.models import User
from farm_market.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

PROVIDER_NAME = "identity provider"


class Identity(BaseModel):
    """Authenticated principal as reported by the identity provider."""

    id: str
    email: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class Caller(BaseModel):
    """Identity plus the stored marketplace profile (absent until the profile is created)."""

    identity: Identity
    profile: Optional[User] = None

    @property
    def id(self) -> str:
        return self.identity.id

    @property
    def is_admin(self) -> bool:
        return bool(self.profile and self.profile.is_admin)

    @property
    def display_name(self) -> str:
        if self.profile and self.profile.name:
            return self.profile.name
        return self.identity.email or self.identity.id


class IdentityProvider:
    def __init__(
        self,
        *,
        base_url: Optional[str],
        service_key: Optional[str],
        jwt_secret: Optional[str] = None,
        jwt_algorithm: str = "HS256",
        jwt_audience: Optional[str] = None,
        timeout: float = 5.0,
    ):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.service_key = service_key
        self.jwt_secret = jwt_secret
        self.jwt_algorithm = jwt_algorithm
        self.jwt_audience = jwt_audience
        self.timeout = timeout

    # ------------------------------------------------------------ verification
    def verify_token(self, token: str) -> Identity:
        """Return the identity behind `token` or raise UnauthenticatedException."""
        if not token:
            raise UnauthenticatedException()
        if self.jwt_secret:
            return self._decode_local(token)
        return self._fetch_remote(token)

    def _decode_local(self, token: str) -> Identity:
        options = {"verify_aud": bool(self.jwt_audience)}
        try:
            payload = jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                audience=self.jwt_audience,
                options=options,
            )
        except ExpiredSignatureError:
            logger.info("Rejected expired access token")
            raise InvalidTokenException()
        except JWTError as e:
            logger.warning("JWT Error: %s", e)
            raise InvalidTokenException()

        user_id = payload.get("sub")
        if not user_id:
            logger.warning("Subject not found in token payload")
            raise InvalidTokenException()
        return Identity(
            id=str(user_id),
            email=payload.get("email"),
            metadata=payload.get("user_metadata") or {},
        )

    def _fetch_remote(self, token: str) -> Identity:
        if not self.base_url:
            logger.error("Identity provider URL is not configured")
            raise UnauthenticatedException()
        headers = {"Authorization": f"Bearer {token}"}
        if self.service_key:
            headers["apikey"] = self.service_key
        try:
            response = requests.get(
                f"{self.base_url}/auth/v1/user", headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error("Identity provider unreachable: %s", e)
            raise UnauthenticatedException()

        if response.status_code != 200:
            logger.info("Identity provider rejected token (%s)", response.status_code)
            raise InvalidTokenException()

        try:
            data = response.json()
        except ValueError:
            logger.error("Identity provider returned a non-JSON user payload")
            raise InvalidTokenException()
        if not isinstance(data, dict) or not data.get("id"):
            raise InvalidTokenException()
        return Identity(
            id=str(data["id"]),
            email=data.get("email"),
            metadata=data.get("user_metadata") or {},
        )

    # ---------------------------------------------------------------- accounts
    def create_account(
        self, email: str, password: str, metadata: Dict[str, Any]
    ) -> Identity:
        """Create an auto-confirmed account through the provider admin API."""
        if not self.base_url or not self.service_key:
            raise ExternalServiceException(
                PROVIDER_NAME, "Account creation is not configured"
            )
        headers = {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
        }
        payload = {
            "email": email,
            "password": password,
            "user_metadata": metadata,
            # No mail server is wired up, so accounts are confirmed on creation.
            "email_confirm": True,
        }
        try:
            response = requests.post(
                f"{self.base_url}/auth/v1/admin/users",
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Identity provider unreachable during signup: %s", e)
            raise ExternalServiceException(PROVIDER_NAME)

        if response.status_code >= 500:
            raise ExternalServiceException(PROVIDER_NAME)
        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.error("Identity provider returned a non-JSON signup reply")
            raise ExternalServiceException(PROVIDER_NAME)
        if response.status_code >= 400:
            message = data.get("msg") or data.get("message") or "Signup failed"
            raise ValidationException(message)
        if not data.get("id"):
            logger.error("Identity provider signup reply has no account id")
            raise ExternalServiceException(PROVIDER_NAME)

        return Identity(
            id=str(data["id"]),
            email=data.get("email", email),
            metadata=data.get("user_metadata") or metadata,
        )


_cached_provider: Optional[IdentityProvider] = None


def get_identity_provider() -> IdentityProvider:
    global _cached_provider
    if _cached_provider is None:
        _cached_provider = IdentityProvider(
            base_url=settings.identity_provider_url,
            service_key=settings.identity_service_key,
            jwt_secret=settings.identity_jwt_secret,
            jwt_algorithm=settings.identity_jwt_algorithm,
            jwt_audience=settings.identity_jwt_audience,
            timeout=settings.identity_timeout_seconds,
        )
        logger.info(
            "Identity tokens verified %s",
            "locally" if settings.uses_local_token_verification else "by the provider",
        )
    return _cached_provider


# ============================================
# FastAPI dependencies
# ============================================
async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> Identity:
    """Resolve the bearer token to an identity; 401 when missing or invalid."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthenticatedException()
    # Remote verification does blocking I/O.
    identity = await run_in_threadpool(provider.verify_token, credentials.credentials)
    request.state.user_id = identity.id
    bind_user(identity.id)
    return identity


async def get_current_caller(
    identity: Identity = Depends(get_current_identity),
    store: KeyValueStore = Depends(get_store),
) -> Caller:
    profile = await UserRepository(store).get_user(identity.id)
    return Caller(identity=identity, profile=profile)


async def require_admin(caller: Caller = Depends(get_current_caller)) -> Caller:
    """Gate for every `/admin/*` route and dispute resolution."""
    if not caller.is_admin:
        logger.warning("Non-admin %s attempted an admin operation", caller.id)
        raise AdminRequiredException()
    return caller

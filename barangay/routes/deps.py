# Request-scoped accessors for the services attached to app.state,
# plus the optional admin bearer-token guard.

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from barangay.core.config import Settings
from barangay.core.errors import AccountNotFound, NotAuthenticated, NotAuthorized
from barangay.core.security import decode_access_token
from barangay.models import ApprovalStatus, Role
from barangay.services.auth_service import AuthService
from barangay.services.limiter import RateLimiter

bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_limiter(request: Request) -> RateLimiter:
    return request.app.state.limiter


def get_records(request: Request) -> dict:
    return request.app.state.records


def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    config: Settings = Depends(get_settings),
    auth: AuthService = Depends(get_auth_service),
) -> str | None:
    """
    Returns the acting admin identity, or None when admin auth is switched off
    """
    if not config.ADMIN_AUTH_REQUIRED:
        return None

    if credentials is None:
        raise NotAuthenticated()

    claims = decode_access_token(credentials.credentials, config)
    if claims.get("role") != Role.PRIVILEGED.value:
        raise NotAuthorized("Privileged account required")

    # The account must still exist and be approved, not just have been at login
    try:
        account = auth.store.find_by_identity(claims["sub"])
    except AccountNotFound:
        raise NotAuthorized("Privileged account required")
    if not account.is_privileged or account.approval_status != ApprovalStatus.APPROVED:
        raise NotAuthorized("Privileged account required")

    return account.identity

# Account routes: registration, password and QR login,
# and retrieval of an account's login QR.

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from barangay.core.config import Settings
from barangay.core.security import create_access_token
from barangay.routes.deps import get_auth_service, get_limiter, get_settings
from barangay.services.auth_service import AuthService, LoginResult
from barangay.services.limiter import RateLimiter

router = APIRouter(prefix="/auth", tags=["auth"])


class RegisterReq(BaseModel):
    identity: str | None = None
    secret: str | None = None
    role: str | None = None


class RegisterResp(BaseModel):
    message: str
    imageArtifact: str


class LoginReq(BaseModel):
    identity: str | None = None
    secret: str | None = None


class TokenLoginReq(BaseModel):
    tokenPayload: Any = None


class LoginResp(BaseModel):
    message: str
    identity: str
    role: str
    accessToken: str


class AccountTokenResp(BaseModel):
    imageArtifact: str


def _login_resp(message: str, result: LoginResult, config: Settings) -> LoginResp:
    token = create_access_token(result.identity, config, extra={"role": result.role.value})
    return LoginResp(message=message, identity=result.identity, role=result.role.value, accessToken=token)


@router.post("/register", response_model=RegisterResp, status_code=201)
def register(req: RegisterReq, auth: AuthService = Depends(get_auth_service)):
    result = auth.register(req.identity, req.secret, req.role)
    return RegisterResp(message=result.message, imageArtifact=result.image)


@router.post("/login", response_model=LoginResp)
def login(
    req: LoginReq,
    request: Request,
    auth: AuthService = Depends(get_auth_service),
    limiter: RateLimiter = Depends(get_limiter),
    config: Settings = Depends(get_settings),
):
    limiter.check(request)
    result = auth.login_with_password(req.identity, req.secret)
    return _login_resp("Login successful", result, config)


@router.post("/login-with-token", response_model=LoginResp)
def login_with_token(
    req: TokenLoginReq,
    request: Request,
    auth: AuthService = Depends(get_auth_service),
    limiter: RateLimiter = Depends(get_limiter),
    config: Settings = Depends(get_settings),
):
    limiter.check(request)
    result = auth.login_with_token(req.tokenPayload)
    return _login_resp("QR login successful", result, config)


@router.get("/account-token/{identity}", response_model=AccountTokenResp)
def account_token(identity: str, auth: AuthService = Depends(get_auth_service)):
    return AccountTokenResp(imageArtifact=auth.account_token(identity))

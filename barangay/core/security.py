# Security-related helpers: JWT access token creation and verification.
import time

import jwt

from barangay.core.config import Settings
from barangay.core.errors import NotAuthorized


def create_access_token(sub: str, config: Settings, extra: dict | None = None) -> str:
    now = int(time.time())
    payload = {
        "iss": config.JWT_ISSUER,
        "aud": config.JWT_AUDIENCE,
        "iat": now,
        "nbf": now,
        "exp": now + config.ACCESS_TOKEN_TTL_SECONDS,
        "sub": sub,
    }

    if extra:
        payload.update(extra)
    return jwt.encode(payload, config.JWT_SECRET, algorithm="HS256")


def decode_access_token(token: str, config: Settings) -> dict:
    try:
        return jwt.decode(
            token,
            config.JWT_SECRET,
            algorithms=["HS256"],
            audience=config.JWT_AUDIENCE,
            issuer=config.JWT_ISSUER,
        )
    except jwt.PyJWTError:
        raise NotAuthorized("Invalid or expired access token")

"""
Authentication routes for the single admin account.

Clients log in once to obtain a signed JWT and send it as a Bearer token.
HTTP Basic credentials are accepted too, for scripts and API clients.
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials, HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from jose import jwt, JWTError

from tax_forms_api.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()
basic_security = HTTPBasic(auto_error=False)
bearer_security = HTTPBearer(auto_error=False)

JWT_ALGORITHM = "HS256"


class UserInfo(BaseModel):
    username: str
    role: str = "admin"


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


def create_access_token(username: str) -> str:
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": username,
        "exp": int(expire.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=JWT_ALGORITHM)


def _verify_token(token: str) -> Optional[str]:
    """Return the username of a valid token, None otherwise"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[JWT_ALGORITHM])
        return payload.get("sub")
    except JWTError:
        return None


def _verify_credentials(username: str, password: str) -> bool:
    """Constant-time comparison against the configured admin account"""
    correct_username = secrets.compare_digest(
        username.encode("utf-8"),
        settings.ADMIN_USERNAME.encode("utf-8")
    )
    correct_password = secrets.compare_digest(
        password.encode("utf-8"),
        settings.ADMIN_PASSWORD.encode("utf-8")
    )
    return correct_username and correct_password


async def verify_session(
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_security),
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_security),
) -> str:
    """Resolve the caller from a Bearer token, falling back to Basic auth."""
    username = None

    if bearer:
        username = _verify_token(bearer.credentials)

    if not username and credentials:
        if _verify_credentials(credentials.username, credentials.password):
            username = credentials.username

    if not username:
        # Only advertise the Basic challenge when the client attempted it
        headers = {"WWW-Authenticate": "Basic"} if credentials else None
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired session",
            headers=headers,
        )

    return username


# Dependency to protect routes
require_admin = Depends(verify_session)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """Exchange admin credentials for an access token"""
    if not _verify_credentials(request.username, request.password):
        logger.warning(f"Failed login attempt for user '{request.username}'")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return TokenResponse(
        access_token=create_access_token(request.username),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.get("/me", response_model=UserInfo)
async def get_current_user(username: str = Depends(verify_session)):
    """Current user info (also serves as session verification)"""
    return UserInfo(username=username)

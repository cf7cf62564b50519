"""Sign-up, login and current-user routes."""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventcatalog.config import settings
from eventcatalog.db.base import STATUS_ACTIVE
from eventcatalog.dependencies import CurrentUser, get_db
from eventcatalog.errors.exceptions import AuthenticationError, ConflictError, NotFoundError
from eventcatalog.models.user import (
    SignupResponse,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from eventcatalog.repositories.user_repo import UserRepository
from eventcatalog.services.id_generator import generate_id

router = APIRouter(tags=["Auth"])


# ── JWT helpers ────────────────────────────────────────────────────────────────

def make_tokens(user_id: str, email: str) -> tuple[str, str]:
    """Return (access_token, refresh_token)."""
    from jose import jwt

    now = datetime.now(timezone.utc)
    access_payload = {
        "sub": user_id,
        "email": email,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_access_token_expire_minutes),
        "type": "access",
    }
    refresh_payload = {
        "sub": user_id,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_refresh_token_expire_days),
        "type": "refresh",
    }

    key = settings.jwt_secret
    algo = settings.jwt_algorithm
    return jwt.encode(access_payload, key, algorithm=algo), jwt.encode(refresh_payload, key, algorithm=algo)


def _hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    h = hashlib.sha256(f"{salt}:{password}".encode()).hexdigest()
    return f"{salt}:{h}"


def _verify_password(password: str, hashed: str) -> bool:
    parts = hashed.split(":", 1)
    if len(parts) != 2:
        return False
    salt, stored = parts
    h = hashlib.sha256(f"{salt}:{password}".encode()).hexdigest()
    return secrets.compare_digest(h, stored)


def _token_response(user_id: str, email: str) -> dict:
    access_token, refresh_token = make_tokens(user_id, email)
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "expires_in": settings.jwt_access_token_expire_minutes * 60,
    }


# ── Endpoints ──────────────────────────────────────────────────────────────────

@router.post("/users", response_model=SignupResponse, status_code=201)
async def sign_up(body: UserCreate, db: AsyncSession = Depends(get_db)):
    repo = UserRepository(db)
    if await repo.get_by_email(body.email):
        raise ConflictError(f"User with email '{body.email}' already exists")
    handle = body.handle or f"user{secrets.randbelow(10**9)}"
    if await repo.get_by_handle(handle):
        raise ConflictError(f"Handle '{handle}' is already taken")

    user = await repo.create(
        user_id=generate_id("usr_"),
        email=body.email,
        handle=handle,
        hashed_password=_hash_password(body.password),
        status=STATUS_ACTIVE,
    )
    await db.commit()
    return SignupResponse(user=UserResponse.model_validate(user), **_token_response(user.user_id, user.email))


@router.post("/auth/login", response_model=TokenResponse)
async def login(body: UserLogin, db: AsyncSession = Depends(get_db)):
    repo = UserRepository(db)
    user = await repo.get_by_email(body.email)
    if not user or not user.hashed_password or user.status != STATUS_ACTIVE:
        raise AuthenticationError("Invalid email or password")
    if not _verify_password(body.password, user.hashed_password):
        raise AuthenticationError("Invalid email or password")

    await repo.update_last_login(user)
    await db.commit()
    return TokenResponse(**_token_response(user.user_id, user.email))


@router.get("/me", response_model=UserResponse)
async def get_me(user: CurrentUser, db: AsyncSession = Depends(get_db)):
    row = await UserRepository(db).get(user["sub"])
    if not row:
        raise NotFoundError("User", user["sub"])
    return UserResponse.model_validate(row)

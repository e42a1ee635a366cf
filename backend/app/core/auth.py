from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.errors import AuthorizationError
from app.models.user import User, UserRole

STAFF_ROLES = frozenset({UserRole.ADMIN.value, UserRole.MODERATOR.value})


@dataclass(frozen=True)
class Caller:
    """Authenticated identity passed explicitly into every service call."""

    user_id: UUID
    external_id: str
    role: str
    is_banned: bool = False

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    @classmethod
    def from_user(cls, user: User) -> "Caller":
        return cls(
            user_id=user.id,  # type: ignore[arg-type]
            external_id=str(user.external_id),
            role=str(user.role),
            is_banned=bool(user.is_banned),
        )


def ensure_staff(caller: Caller | None) -> Caller:
    """Reject callers that are not admins or moderators."""
    if caller is None or not caller.is_staff:
        raise AuthorizationError("Admin or moderator role required")
    return caller


def ensure_authenticated(caller: Caller | None) -> Caller:
    if caller is None:
        raise AuthorizationError("Authentication required")
    return caller


def ensure_can_post(caller: Caller | None) -> Caller:
    """Reject anonymous or banned callers from creating content."""
    caller = ensure_authenticated(caller)
    if caller.is_banned:
        raise AuthorizationError("Banned users cannot create content")
    return caller


def issue_token(external_id: str, expires_in: int | None = None) -> str:
    """Sign a bearer token the way the identity provider does (used by tooling and tests)."""
    payload: dict[str, object] = {"sub": external_id, "iat": datetime.now(UTC)}
    if expires_in is not None:
        payload["exp"] = datetime.now(UTC) + timedelta(seconds=expires_in)
    if settings.AUTH_JWT_AUDIENCE:
        payload["aud"] = settings.AUTH_JWT_AUDIENCE
    return jwt.encode(payload, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)


def _decode_subject(token: str) -> str:
    options = {"verify_aud": bool(settings.AUTH_JWT_AUDIENCE)}
    try:
        claims = jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE or None,
            options=options,
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired") from None
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token") from None
    subject = claims.get("sub")
    if not subject:
        raise HTTPException(status_code=401, detail="Token has no subject")
    return str(subject)


def get_token_subject(request: Request) -> str:
    """Verify the bearer token and return its subject (the user's external id)."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise HTTPException(status_code=401, detail="Authentication required")

    if not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    token = auth_header[7:]
    if not token:
        raise HTTPException(status_code=401, detail="Token is required")

    return _decode_subject(token)


def get_current_caller(
    request: Request,
    db: Session = Depends(get_db),
) -> Caller:
    """Resolve the bearer token to a Caller, or fail with 401."""
    external_id = get_token_subject(request)
    user = db.query(User).filter(User.external_id == external_id).first()
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return Caller.from_user(user)


def get_staff_caller(caller: Caller = Depends(get_current_caller)) -> Caller:
    """Route guard for the admin console; 403 before any data access."""
    return ensure_staff(caller)

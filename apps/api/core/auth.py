"""
Authentication dependencies.

Routes never look the caller up themselves: they declare a RequestContext
dependency and receive the resolved user together with the request's
database session.
"""
from dataclasses import dataclass
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from core.database import get_db
from core.exceptions import AuthenticationRequired
from core.security import decode_access_token
from models import User

# Use auto_error=False to handle missing credentials manually and return 401 (not 403)
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RequestContext:
    """Per-request identity and data access, passed explicitly to handlers."""
    user: User
    db: Session

    @property
    def user_id(self) -> UUID:
        return self.user.id


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the bearer token to a User.

    Raises AuthenticationRequired (401) if the token is missing or invalid,
    or the user no longer exists.
    """
    if not credentials:
        raise AuthenticationRequired("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise AuthenticationRequired("Invalid authentication credentials")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationRequired("Invalid token payload")

    try:
        user_id_uuid = UUID(str(user_id))
    except ValueError:
        raise AuthenticationRequired("Invalid user ID format")

    user = db.query(User).filter(User.id == user_id_uuid).first()
    if not user:
        raise AuthenticationRequired("User not found")

    return user


def get_request_context(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> RequestContext:
    return RequestContext(user=user, db=db)

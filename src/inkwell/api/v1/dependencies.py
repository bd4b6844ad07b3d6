"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from inkwell.core.roles import RoleSeedConfig, load_role_config
from inkwell.core.security import decode_access_token
from inkwell.core.settings import settings
from inkwell.db.session import get_db
from inkwell.models import User

# Missing credentials are allowed; endpoints decide whether a caller is required.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User | None:
    """Resolve the caller from a bearer token, if one was sent.

    Args:
        credentials: HTTP Bearer token credentials, or None
        db: Database session

    Returns:
        The authenticated user, or None for anonymous requests

    Raises:
        HTTPException: If a token was sent but is invalid or names no user
    """
    if credentials is None:
        return None
    try:
        subject = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise _credentials_error() from err
    if subject is None or not subject.isdigit():
        raise _credentials_error()

    user = db.get(User, int(subject))
    if user is None:
        raise _credentials_error("User not found")
    return user


def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Require an authenticated caller."""
    if user is None:
        raise _credentials_error("Not authenticated")
    return user


def get_role_config(request: Request) -> RoleSeedConfig:
    """Return the role configuration loaded at startup."""
    config = getattr(request.app.state, "role_config", None)
    if config is None:
        config = load_role_config(settings.role_config_file)
        request.app.state.role_config = config
    return config


# Type aliases for caller dependencies
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
RoleConfigDep = Annotated[RoleSeedConfig, Depends(get_role_config)]

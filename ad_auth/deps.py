from __future__ import annotations

from typing import Iterator, Optional

from fastapi import Depends, HTTPException, Request, status

from .ad import DirectoryClient
from .services import AuthenticationResolver, Guard, Principal
from .services.auth import LOGIN_FAILED
from .settings import Settings, get_settings


def get_directory(settings: Settings = Depends(get_settings)) -> Iterator[DirectoryClient]:
    """Request scoped connection, released on every exit path."""
    with DirectoryClient.connect(settings.directory_config()) as client:
        yield client


def get_resolver(client: DirectoryClient = Depends(get_directory)) -> AuthenticationResolver:
    return AuthenticationResolver(client)


def get_guard(resolver: AuthenticationResolver = Depends(get_resolver)) -> Guard:
    return Guard(resolver)


def get_remote_user(request: Request, settings: Settings = Depends(get_settings)) -> Optional[str]:
    """`DOMAIN\\user` set by the front end.

    The ASGI scope is read first. The header named by AUTH_REMOTE_USER_HEADER
    is read only when that is configured, which must only be done behind a
    proxy that sets or strips it.
    """
    value = request.scope.get("REMOTE_USER")
    if not value and settings.remote_user_header:
        value = request.headers.get(settings.remote_user_header)
    return value or None


def client_info(request: Request) -> tuple[str, str]:
    ip = request.client.host if request.client else ""
    ua = request.headers.get("user-agent", "")
    return ip, ua


def require_transparent_principal(
    request: Request,
    guard: Guard = Depends(get_guard),
    remote_user: Optional[str] = Depends(get_remote_user),
) -> Principal:
    ip, ua = client_info(request)
    result = guard.auto(remote_user, ip=ip, ua=ua)
    if not result.success or result.principal is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=LOGIN_FAILED)
    return result.principal


def require_admin(
    principal: Principal = Depends(require_transparent_principal),
    guard: Guard = Depends(get_guard),
) -> Principal:
    if not guard.admin(principal):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return principal

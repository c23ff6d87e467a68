from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from ..deps import client_info, get_guard, get_remote_user, require_admin, require_transparent_principal
from ..services import Credentials, Guard, Principal
from ..services.auth import LOGIN_FAILED


router = APIRouter()


class LoginRequest(BaseModel):
    username: str = Field(default="", max_length=256)
    password: str = Field(default="", max_length=1024)


class PrincipalOut(BaseModel):
    id: str
    username: str
    tier: str
    group: str
    admin: bool


def _out(principal: Principal) -> PrincipalOut:
    return PrincipalOut(**principal.to_dict())


@router.post("/login", response_model=PrincipalOut)
def login(body: LoginRequest, request: Request, guard: Guard = Depends(get_guard)):
    username = body.username.strip()
    # Empty input fails like any other bad login.
    if not username or not body.password:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=LOGIN_FAILED)

    ip, ua = client_info(request)
    result = guard.attempt(Credentials(username=username, password=body.password), ip=ip, ua=ua)
    if not result.success or result.principal is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=result.error_message or LOGIN_FAILED)
    return _out(result.principal)


@router.post("/login/auto", response_model=PrincipalOut)
def login_auto(
    request: Request,
    guard: Guard = Depends(get_guard),
    remote_user: Optional[str] = Depends(get_remote_user),
):
    ip, ua = client_info(request)
    result = guard.auto(remote_user, ip=ip, ua=ua)
    if not result.success or result.principal is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=LOGIN_FAILED)
    return _out(result.principal)


@router.get("/admin/check")
def admin_check(principal: Principal = Depends(require_transparent_principal), guard: Guard = Depends(get_guard)):
    return {"username": principal.username, "admin": guard.admin(principal)}


@router.get("/admin/ping")
def admin_ping(principal: Principal = Depends(require_admin)):
    return {"ok": True, "username": principal.username}

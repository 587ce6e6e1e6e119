# src/routes/auth_routes.py
"""
Session authentication routes.

Credentials are checked against the user directory; the resulting caller
identity (with its active agents) is kept in the signed session cookie.
"""

from fastapi import APIRouter, Depends, Request
from dependency_injector.wiring import Provide, inject
from typing import Dict, Any
import logging

from di.container import Container
from core.application.dto.requests import LoginRequest
from core.entities.agent import CallerIdentity
from core.exceptions import AuthenticationFailedException
from core.interfaces.repositories import IUserDirectory
from middleware.auth_middleware import get_current_user, login_session, logout_session

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login")
@inject
async def login(
    request: Request,
    credentials: LoginRequest,
    user_directory: IUserDirectory = Depends(Provide[Container.user_directory])
) -> Dict[str, Any]:
    caller = await user_directory.authenticate(credentials.email, credentials.api_key)
    if caller is None:
        logger.warning(f"Failed login for {credentials.email}")
        raise AuthenticationFailedException("Invalid email or API key")

    login_session(request, caller)
    logger.info(f"User {caller.email} logged in with {len(caller.agents)} agent(s)")
    return {"success": True, "user": caller.to_dict()}


@router.post("/logout")
async def logout(request: Request) -> Dict[str, Any]:
    logout_session(request)
    return {"success": True}


@router.get("/session")
async def get_session(caller: CallerIdentity = Depends(get_current_user)) -> Dict[str, Any]:
    return {"user": caller.to_dict()}

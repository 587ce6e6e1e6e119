from fastapi import Request
import logging

from core.entities.agent import CallerIdentity
from core.exceptions import AuthenticationFailedException

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


def login_session(request: Request, caller: CallerIdentity) -> None:
    """Store the authenticated caller in the signed session cookie."""
    request.session[SESSION_USER_KEY] = caller.to_dict()


def logout_session(request: Request) -> None:
    request.session.clear()


def get_current_user(request: Request) -> CallerIdentity:
    """FastAPI dependency resolving the session caller, 401 when absent."""
    user = request.session.get(SESSION_USER_KEY)
    if not user:
        raise AuthenticationFailedException()
    try:
        return CallerIdentity.from_dict(user)
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning(f"Discarding malformed session: {e}")
        request.session.clear()
        raise AuthenticationFailedException()

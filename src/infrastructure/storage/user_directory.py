# src/infrastructure/storage/user_directory.py
"""
JSON-file implementation of the user directory.

The file holds a list of users::

    [{"id": "u1", "email": "ops@example.com", "name": "Ops", "role": "client",
      "api_key": "...", "agents": [{"id": "a1", "name": "Sales",
      "bolna_agent_id": "..."}]}]

Inactive agents are dropped when the caller identity is built.
"""

import hmac
import json
import logging
from typing import Optional, List, Dict, Any

import aiofiles

from core.entities.agent import CallerIdentity
from core.interfaces.repositories import IUserDirectory

logger = logging.getLogger(__name__)


class JsonUserDirectory(IUserDirectory):
    """User directory read from a JSON file on every lookup."""

    def __init__(self, file_path: Optional[str]):
        self.file_path = file_path

    async def _load_users(self) -> List[Dict[str, Any]]:
        if not self.file_path:
            logger.warning("USERS_FILE is not configured; no users can log in")
            return []
        try:
            async with aiofiles.open(self.file_path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            logger.warning(f"User directory file not found: {self.file_path}")
            return []

        try:
            users = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"User directory file is not valid JSON: {e}")
            return []

        if isinstance(users, dict):
            users = users.get("users", [])
        return [user for user in users if isinstance(user, dict)]

    async def authenticate(self, email: str, api_key: str) -> Optional[CallerIdentity]:
        if not email or not api_key:
            return None
        email = email.strip().lower()
        for user in await self._load_users():
            if (user.get("email") or "").lower() != email:
                continue
            stored_key = user.get("api_key") or ""
            if stored_key and hmac.compare_digest(
                str(stored_key).encode("utf-8"), str(api_key).encode("utf-8")
            ):
                return CallerIdentity.from_dict(user)
            return None
        return None

    async def get_user(self, user_id: str) -> Optional[CallerIdentity]:
        for user in await self._load_users():
            if str(user.get("id")) == str(user_id):
                return CallerIdentity.from_dict(user)
        return None

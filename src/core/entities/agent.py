"""
Agent and caller identity entities.

An agent here is a tenant-configured bot on the voice agent provider, not a
software worker. Callers own zero or more agents; admins may act on any.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List


class CallerRole(Enum):
    ADMIN = "admin"
    CLIENT = "client"


@dataclass(frozen=True)
class AgentIdentity:
    """Mapping from a local agent entry to its upstream agent id."""
    id: str
    bolna_agent_id: str
    name: str
    description: Optional[str] = None
    color: str = "#3B82F6"
    is_active: bool = True

    def __post_init__(self):
        if not self.bolna_agent_id:
            raise ValueError("bolna_agent_id cannot be empty")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgentIdentity":
        return cls(
            id=str(data.get("id") or data.get("bolna_agent_id") or data.get("bolnaAgentId")),
            bolna_agent_id=data.get("bolna_agent_id") or data.get("bolnaAgentId") or "",
            name=data.get("name") or "",
            description=data.get("description"),
            color=data.get("color") or "#3B82F6",
            is_active=data.get("is_active", data.get("isActive", True)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "bolna_agent_id": self.bolna_agent_id,
            "description": self.description,
            "color": self.color,
        }


@dataclass(frozen=True)
class CallerIdentity:
    """
    Authenticated dashboard user as carried in the session.
    """
    id: str
    email: str
    name: str
    role: CallerRole = CallerRole.CLIENT
    agents: List[AgentIdentity] = field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        return self.role is CallerRole.ADMIN

    @property
    def agent_ids(self) -> List[str]:
        """Upstream agent ids owned by this caller, in configured order."""
        return [agent.bolna_agent_id for agent in self.agents]

    def owns_agent(self, bolna_agent_id: str) -> bool:
        return any(agent.bolna_agent_id == bolna_agent_id for agent in self.agents)

    def can_access_agent(self, bolna_agent_id: Optional[str]) -> bool:
        """Admins bypass ownership entirely."""
        if self.is_admin:
            return True
        return bool(bolna_agent_id) and self.owns_agent(bolna_agent_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CallerIdentity":
        try:
            role = CallerRole(data.get("role") or CallerRole.CLIENT.value)
        except ValueError:
            role = CallerRole.CLIENT
        agents = [
            AgentIdentity.from_dict(agent)
            for agent in data.get("agents") or []
            if agent.get("bolna_agent_id") or agent.get("bolnaAgentId")
        ]
        return cls(
            id=str(data.get("id") or data.get("email")),
            email=data.get("email") or "",
            name=data.get("name") or "",
            role=role,
            agents=[agent for agent in agents if agent.is_active],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "agents": [agent.to_dict() for agent in self.agents],
        }

"""
Core Domain Layer

This module contains the core entities, interfaces, and domain exceptions
for the call dashboard backend. It holds no web framework or HTTP client code.

The core layer is organized into:
- entities: Conversation, caller/agent identity, analytics and batch helpers
- interfaces: Abstract contracts for the event bus, conversation store,
  upstream providers and the user directory
- exceptions: Domain-specific exceptions
"""

from .exceptions import (
    DomainException,
    InvalidRequestException,
    AuthenticationFailedException,
    AgentAccessDeniedException,
    UpstreamServiceException,
    ConfigurationException
)

__version__ = "1.0.0"
__all__ = [
    "DomainException",
    "InvalidRequestException",
    "AuthenticationFailedException",
    "AgentAccessDeniedException",
    "UpstreamServiceException",
    "ConfigurationException"
]

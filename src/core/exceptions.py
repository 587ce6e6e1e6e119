"""
Domain-specific exceptions for the call dashboard backend.

These exceptions represent caller input errors, authorization failures,
upstream provider failures and configuration problems. They are
framework-agnostic; the HTTP mapping lives in middleware.error_handler.
"""

from typing import Optional, Dict, Any


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details
        }


class InvalidRequestException(DomainException):
    """Raised when a required field or parameter is missing or malformed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "INVALID_REQUEST", details)


class AuthenticationFailedException(DomainException):
    """Raised when the caller has no session or presents bad credentials."""

    def __init__(
        self,
        reason: str = "Unauthorized",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(reason, "AUTHENTICATION_FAILED", details)


class AgentAccessDeniedException(DomainException):
    """Raised when a caller asks for an agent they do not own."""

    def __init__(
        self,
        agent_id: str,
        message: str = "You do not have access to this agent",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        exception_details = {"agent_id": agent_id}
        if details:
            exception_details.update(details)
        super().__init__(message, "AGENT_ACCESS_DENIED", exception_details)


class UpstreamServiceException(DomainException):
    """Raised when an upstream provider answers with a non-success response.

    ``status_code`` is the HTTP status the dashboard should answer with. Proxy
    routes forward the upstream status; call bridges always report 500.
    """

    def __init__(
        self,
        service: str,
        message: str,
        upstream_status: Optional[int] = None,
        body: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        exception_details = {"service": service}
        if upstream_status is not None:
            exception_details["upstream_status"] = upstream_status
        if body is not None:
            exception_details["body"] = body
        if details:
            exception_details.update(details)
        super().__init__(message, "UPSTREAM_ERROR", exception_details)
        self.service = service
        self.upstream_status = upstream_status
        self.body = body
        if status_code is None:
            status_code = upstream_status if upstream_status and upstream_status >= 400 else 500
        self.status_code = status_code

    def with_status(self, status_code: int) -> "UpstreamServiceException":
        """Return a copy that reports ``status_code`` to the caller."""
        return UpstreamServiceException(
            service=self.service,
            message=self.message,
            upstream_status=self.upstream_status,
            body=self.body,
            status_code=status_code
        )


class ConfigurationException(DomainException):
    """Raised when a credential or setting needed for this request is missing."""

    def __init__(
        self,
        missing: str,
        message: str = "Server configuration error",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        exception_details = {"missing": missing}
        if details:
            exception_details.update(details)
        super().__init__(message, "CONFIGURATION_ERROR", exception_details)

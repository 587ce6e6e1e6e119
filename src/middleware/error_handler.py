from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
import aiohttp
import logging

from core.exceptions import (
    AgentAccessDeniedException,
    AuthenticationFailedException,
    ConfigurationException,
    DomainException,
    InvalidRequestException,
    UpstreamServiceException
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    InvalidRequestException: 400,
    AuthenticationFailedException: 401,
    AgentAccessDeniedException: 403,
    ConfigurationException: 500,
}


def add_error_handlers(app: FastAPI):
    @app.exception_handler(UpstreamServiceException)
    async def upstream_error_handler(request: Request, exc: UpstreamServiceException):
        logger.error(
            f"Upstream {exc.service} error on {request.url.path}: "
            f"{exc.upstream_status} {exc.body}"
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict()
        )

    @app.exception_handler(ConfigurationException)
    async def configuration_error_handler(request: Request, exc: ConfigurationException):
        logger.error(f"Configuration error on {request.url.path}: missing {exc.details.get('missing')}")
        return JSONResponse(
            status_code=500,
            content=exc.to_dict()
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        status_code = STATUS_CODES.get(type(exc), 400)
        logger.warning(f"{exc.error_code} on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content=exc.to_dict()
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request",
                "error_code": "INVALID_REQUEST",
                "details": {"errors": jsonable_encoder(exc.errors())}
            }
        )

    @app.exception_handler(aiohttp.ClientError)
    async def connection_error_handler(request: Request, exc: aiohttp.ClientError):
        logger.error(f"Upstream connection failed on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=503,
            content={
                "error": "Service connection failed",
                "error_code": "UPSTREAM_UNREACHABLE",
                "details": {"reason": str(exc)}
            }
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global error: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "error_code": "INTERNAL_ERROR",
                "details": {"reason": str(exc)}
            }
        )

from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.core.exceptions import AppException
from app.core.logging_config import get_logger
from app.schemas.base import create_error_response, create_success_response

logger = get_logger(__name__)


class ResponseWrapper:
    """Utility class for wrapping responses in standard format"""

    @staticmethod
    def success(data: Any = None, message: str = "Success") -> Dict[str, Any]:
        return jsonable_encoder(create_success_response(data, message))

    @staticmethod
    def error(
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Wrap error response and make it JSON-safe"""
        return jsonable_encoder(create_error_response(message, error_code, details))

    @staticmethod
    def created(data: Any = None, message: str = "Resource created successfully") -> Dict[str, Any]:
        return ResponseWrapper.success(data, message)

    @staticmethod
    def updated(data: Any = None, message: str = "Resource updated successfully") -> Dict[str, Any]:
        return ResponseWrapper.success(data, message)

    @staticmethod
    def deleted(message: str = "Resource deleted successfully") -> Dict[str, Any]:
        return ResponseWrapper.success(None, message)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render service errors as ``{"detail": ResponseWrapper.error(...)}``, like HTTPException details."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": ResponseWrapper.error(exc.message, exc.error_code, exc.details)},
    )

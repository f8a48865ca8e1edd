from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def create_success_response(data: Any = None, message: str = "Success") -> Dict[str, Any]:
    """Create a success response with UTC timestamp"""
    return {
        "success": True,
        "message": message,
        "data": data,
        "timestamp": _timestamp(),
    }


def create_error_response(message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Create an error response with UTC timestamp"""
    return {
        "success": False,
        "message": message,
        "error_code": error_code,
        "details": details,
        "timestamp": _timestamp(),
    }

"""
Application Exception Handling

AppException carries every application error to the client with a
consistent JSON shape. The catalog raises the typed subclasses below so
callers can tell failures apart without parsing codes.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Usage:
        raise AppException("Invalid product ID", "INVALID_PRODUCT_ID", 400)

    Error Codes:
        Catalog:
            - INVALID_QUERY (400)
            - INVALID_PRODUCT_ID (400)
            - PRODUCT_NOT_FOUND (404)
            - STORE_ERROR (500)
            - SEARCH_INDEX_ERROR (500)
            - CATALOG_NOT_LOADED (503)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


class InvalidQueryError(AppException):
    """Search text was empty."""

    def __init__(self, message: str = "Missing search query"):
        super().__init__(message, "INVALID_QUERY", 400)


class NotFoundError(AppException):
    """Product identifier does not exist in the store."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(
            f"Product {product_id} not found",
            "PRODUCT_NOT_FOUND",
            404,
            {"product_id": product_id}
        )


class StoreError(AppException):
    """Persistence failure, transient or permanent."""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, "STORE_ERROR", 500, details)


class SearchIndexError(AppException):
    """Search index could not be built or queried."""

    def __init__(self, message: str):
        super().__init__(message, "SEARCH_INDEX_ERROR", 500)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException to consistent JSON error response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def invalid_product_id(raw_id: str) -> AppException:
    """Create invalid product ID exception."""
    return AppException(
        "Invalid product ID",
        "INVALID_PRODUCT_ID",
        400,
        {"product_id": raw_id}
    )


def catalog_not_loaded() -> AppException:
    """Create catalog not loaded exception."""
    return AppException(
        "Product catalog not loaded",
        "CATALOG_NOT_LOADED",
        503
    )
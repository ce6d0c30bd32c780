"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from product_search.catalog.catalog import ProductCatalog
from product_search.core.dependencies import get_catalog_optional
from product_search.db.database import get_db


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, db: Session, catalog: Optional[ProductCatalog]):
        self._db = db
        self._catalog = catalog

    def check_database(self) -> str:
        """Check database connectivity."""
        try:
            self._db.execute(text("SELECT 1"))
            return "healthy"
        except SQLAlchemyError:
            return "unhealthy"

    def check_catalog(self) -> dict:
        """Check catalog status."""
        if self._catalog:
            return {"status": "healthy", "products": len(self._catalog.index)}
        return {"status": "not_loaded", "products": 0}

    def get_health(self) -> dict:
        """Get full health status."""
        db_status = self.check_database()
        catalog_info = self.check_catalog()

        healthy = db_status == "healthy" and catalog_info["status"] == "healthy"

        return {
            "status": "healthy" if healthy else "degraded",
            "components": {
                "api": "healthy",
                "database": db_status,
                "catalog": catalog_info["status"]
            },
            "details": {
                "products_indexed": catalog_info["products"]
            }
        }


@router.get("")
def health_check(
    db: Session = Depends(get_db),
    catalog: Optional[ProductCatalog] = Depends(get_catalog_optional)
):
    """
    Health check endpoint.

    Returns system status including API, database, and catalog.
    """
    controller = HealthController(db, catalog)
    return controller.get_health()


@router.get("/ready")
async def readiness_check(
    catalog: Optional[ProductCatalog] = Depends(get_catalog_optional)
):
    """Readiness probe: ready once the catalog is built."""
    return {"ready": catalog is not None}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}

"""
Liveness and readiness probes.

Liveness only says the process answers. Readiness also pings the ledger
database, which is the single dependency the service has.
"""
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy import text

from api.config import settings

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class ComponentHealth:
    name: str
    status: HealthStatus
    latency_ms: Optional[float] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "latency_ms": self.latency_ms,
            "message": self.message,
        }


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def check_database_health() -> ComponentHealth:
    """Run ``SELECT 1`` on a fresh session and time it."""
    from api.database import SessionLocal

    started = time.perf_counter()
    db = SessionLocal()
    try:
        ok = db.execute(text("SELECT 1")).scalar() == 1
    except Exception as e:
        logger.error("Database health check failed: %s", e)
        return ComponentHealth(
            name="database",
            status=HealthStatus.UNHEALTHY,
            latency_ms=round((time.perf_counter() - started) * 1000, 2),
            message=f"Connection failed: {type(e).__name__}",
        )
    finally:
        db.close()

    return ComponentHealth(
        name="database",
        status=HealthStatus.HEALTHY if ok else HealthStatus.UNHEALTHY,
        latency_ms=round((time.perf_counter() - started) * 1000, 2),
        message="Database connected" if ok else "Unexpected query result",
    )


def perform_liveness_check() -> Dict[str, Any]:
    return {"status": "alive", "timestamp": _utc_now()}


def perform_health_check() -> Dict[str, Any]:
    """Readiness report; overall status follows the database."""
    database = check_database_health()
    return {
        "status": database.status.value,
        "timestamp": _utc_now(),
        "version": API_VERSION,
        "environment": settings.environment,
        "components": {"database": database.to_dict()},
    }

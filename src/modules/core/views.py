import time
from typing import Any, Dict

import structlog
from django.core.cache import caches
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger()

# Cache aliases probed by the health check, keyed by the name reported.
CHECKED_CACHES = {"cache": "default", "customer_cache": "customers"}


def _check_database() -> Dict[str, Any]:
    start = time.monotonic()
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def _check_cache(alias: str) -> Dict[str, Any]:
    start = time.monotonic()
    backend = caches[alias]
    backend.set("_health_check", "ok", 10)
    if backend.get("_health_check") != "ok":
        raise ConnectionError(f"Cache {alias} read failed")
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    try:
        services["database"] = _check_database()
    except Exception:
        services["database"] = {"status": "down"}
        overall_healthy = False
        logger.error("health_check_db_failure", exc_info=True)

    for name, alias in CHECKED_CACHES.items():
        try:
            services[name] = _check_cache(alias)
        except Exception:
            services[name] = {"status": "down"}
            overall_healthy = False
            logger.error("health_check_cache_failure", cache=alias, exc_info=True)

    status_code = 200 if overall_healthy else 503

    logger.info(
        "health_check_completed", status="healthy" if overall_healthy else "unhealthy"
    )

    return JsonResponse(
        {
            "status": "healthy" if overall_healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=status_code,
    )

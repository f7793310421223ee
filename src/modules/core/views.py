import time
from typing import Any, Callable, Dict

import structlog
from django.core.cache import cache
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger()

HEALTH_CACHE_KEY = "_health_check"


def _ping_database() -> None:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _ping_cache() -> None:
    cache.set(HEALTH_CACHE_KEY, "ok", 10)
    if cache.get(HEALTH_CACHE_KEY) != "ok":
        raise ConnectionError("Cache read failed")


def _probe(name: str, ping: Callable[[], None]) -> Dict[str, Any]:
    start = time.monotonic()
    try:
        ping()
    except Exception:
        logger.exception("health_check_failure", service=name)
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """Report database and cache reachability (the store and cache collaborators)."""
    services = {
        "database": _probe("database", _ping_database),
        "cache": _probe("cache", _ping_cache),
    }
    overall_healthy = all(s["status"] == "up" for s in services.values())
    status_label = "healthy" if overall_healthy else "unhealthy"

    logger.info("health_check_completed", status=status_label)

    return JsonResponse(
        {
            "status": status_label,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if overall_healthy else 503,
    )

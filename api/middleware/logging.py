import os
import json
import logging
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware


access_logger = logging.getLogger("api.access")


def request_logging_enabled() -> bool:
    return os.getenv("LOGGING_ENABLED", "false").lower() == "true"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Emit one JSON line per request when ``LOGGING_ENABLED=true``."""

    async def dispatch(self, request: Request, call_next):
        if not request_logging_enabled():
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        entry = {
            "ts": round(time.time(), 3),
            "ip": request.client.host if request.client else None,
            "method": request.method,
            "endpoint": request.url.path,
            "query": dict(request.query_params),
            "status": response.status_code,
            "latency_ms": round((time.perf_counter() - start) * 1000, 2),
        }
        access_logger.info(json.dumps(entry))
        return response

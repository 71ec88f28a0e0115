"""
Request logging middleware.

Every request gets a request id and a correlation id, taken from the
``X-Request-ID`` and ``X-Correlation-ID`` headers or generated when the
client did not send them.  Both are echoed back on the response and are
visible to every log record emitted while the request is served (see
``logging_config.RequestIdFilter``).  Start and completion of each
request are logged with the response status and duration.
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.responses import Response

from .logging_config import correlation_id_var, request_id_var

logger = logging.getLogger("catalog_api.http")

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Correlation-ID"


def client_address(request: Request) -> str:
    """Best guess of the client address behind proxies."""
    forwarded_for = request.headers.get("X-Forwarded-For", "").strip()
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    real_ip = request.headers.get("X-Real-IP", "").strip()
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


async def log_requests(request: Request, call_next) -> Response:
    request_id = request.headers.get(REQUEST_ID_HEADER, "").strip() or str(uuid.uuid4())
    correlation_id = request.headers.get(CORRELATION_ID_HEADER, "").strip() or str(uuid.uuid4())
    request_token = request_id_var.set(request_id)
    correlation_token = correlation_id_var.set(correlation_id)

    method, path = request.method, request.url.path
    logger.info("HTTP Request started - %s %s from %s", method, path, client_address(request))
    started = time.perf_counter()
    try:
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = int((time.perf_counter() - started) * 1000)
            logger.exception(
                "HTTP Request completed with exception - %s %s - Duration: %sms",
                method, path, duration_ms,
            )
            raise
        duration_ms = int((time.perf_counter() - started) * 1000)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        logger.info(
            "HTTP Request completed - %s %s - Status: %s - Duration: %sms",
            method, path, response.status_code, duration_ms,
        )
        return response
    finally:
        request_id_var.reset(request_token)
        correlation_id_var.reset(correlation_token)

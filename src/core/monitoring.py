"""Monitoring and metrics collection.

Prometheus metrics for inbound HTTP traffic, proxy routing outcomes and
upstream TMDB calls.
"""

from prometheus_client import Counter, Histogram, Info
import structlog

from .config import Settings

logger = structlog.get_logger(__name__)

request_count = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"]
)

request_duration = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"]
)

proxy_requests = Counter(
    "proxy_requests_total",
    "Total number of relayed proxy requests",
    ["route", "outcome"]
)

external_service_requests = Counter(
    "external_service_requests_total",
    "Total requests to external services",
    ["service", "status_code"]
)

external_service_duration = Histogram(
    "external_service_request_duration_seconds",
    "External service request duration in seconds",
    ["service"]
)

error_count = Counter(
    "errors_total",
    "Total number of errors",
    ["type", "component"]
)

app_info = Info(
    "app_info",
    "Application information"
)


def setup_monitoring(settings: Settings) -> None:
    """Setup monitoring and metrics collection."""
    logger.info("Setting up monitoring")

    app_info.info({
        "version": settings.app_version,
        "name": "moviearc-proxy",
    })


def track_request(method: str, endpoint: str, status_code: int, duration: float) -> None:
    """Track HTTP request metrics.

    Args:
        method: HTTP method.
        endpoint: Request endpoint.
        status_code: Response status code.
        duration: Request duration in seconds.
    """
    request_count.labels(
        method=method,
        endpoint=endpoint,
        status_code=status_code
    ).inc()

    request_duration.labels(
        method=method,
        endpoint=endpoint
    ).observe(duration)


def track_proxy_request(route: str, outcome: str) -> None:
    """Track one relayed request.

    Args:
        route: Query kind that was routed (popular, search, discover, ...).
        outcome: relayed, upstream_error, unreachable or misconfigured.
    """
    proxy_requests.labels(route=route, outcome=outcome).inc()


def track_external_service(service: str, status_code: int, duration: float) -> None:
    """Track external service request metrics.

    Args:
        service: Service name.
        status_code: HTTP status code, 0 when no response was received.
        duration: Request duration in seconds.
    """
    external_service_requests.labels(
        service=service,
        status_code=status_code
    ).inc()

    external_service_duration.labels(service=service).observe(duration)


def track_error(error_type: str, component: str) -> None:
    """Track error occurrence."""
    error_count.labels(type=error_type, component=component).inc()

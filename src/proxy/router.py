"""Proxy router.

The single relay endpoint. Every response it produces, errors included,
carries the configured cross-origin headers.
"""

from typing import Dict

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import PlainTextResponse
from starlette.datastructures import QueryParams
import structlog

from core.config import Settings, get_settings
from core.exceptions import ConfigurationError, ExternalServiceError, UpstreamError

from .dependencies import get_proxy_service
from .service import ProxyService

router = APIRouter()
logger = structlog.get_logger(__name__)

UPSTREAM_ERROR_BODY = "TMDB error"


def first_values(query_params: QueryParams) -> Dict[str, str]:
    """Collapse repeated parameters to their first value."""
    return {key: query_params.getlist(key)[0] for key in query_params.keys()}


@router.api_route("/", methods=["GET", "OPTIONS"], summary="Relay a TMDB query")
async def relay(
    request: Request,
    settings: Settings = Depends(get_settings),
    proxy_service: ProxyService = Depends(get_proxy_service),
) -> Response:
    """Relay a movie query to TMDB.

    ``id`` fetches one title, ``genres=1`` the genre table, ``genre``/``year``
    a popularity-sorted discovery list, ``popular=1`` or a missing ``query``
    the popular list, and anything else a title search for ``query``.

    Args:
        request: FastAPI request object.
        settings: Application settings.
        proxy_service: Proxy service.

    Returns:
        Response: The TMDB body on success, a plain-text error otherwise.
    """
    cors_headers = settings.cors_headers

    # Preflight never reaches the credential check.
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, headers=cors_headers)

    try:
        upstream = await proxy_service.relay(first_values(request.query_params))
    except ConfigurationError as e:
        logger.error("TMDB key not configured", error=str(e))
        return PlainTextResponse(
            str(e),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            headers=cors_headers,
        )
    except UpstreamError as e:
        logger.warning(
            "TMDB returned an error",
            status_code=e.status_code,
            upstream_path=e.path,
        )
        return PlainTextResponse(
            UPSTREAM_ERROR_BODY,
            status_code=e.status_code,
            headers=cors_headers,
        )
    except ExternalServiceError as e:
        logger.error("TMDB unreachable", error=str(e), **e.details)
        return PlainTextResponse(
            UPSTREAM_ERROR_BODY,
            status_code=status.HTTP_502_BAD_GATEWAY,
            headers=cors_headers,
        )

    return Response(
        content=upstream.content,
        status_code=status.HTTP_200_OK,
        media_type="application/json",
        headers={"Cache-Control": settings.cache_control, **cors_headers},
    )

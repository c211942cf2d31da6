"""Synchronous transfer invoker built on httpx."""

from __future__ import annotations

import time
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from .buffer import BufferAccumulator
from .codec import with_query
from .config import ClientConfig
from .exceptions import BufferOverflowError, TransferError, UnsupportedMethodError
from .logging_config import get_logger
from .models import STATUS_NOT_ATTEMPTED, HTTPMethod, Request, Response

logger = get_logger("transfer")

INIT_FAILURE_REASON = "failed to initialize transfer context"


def build_header_lines(headers: Optional[Mapping[str, str]]) -> List[str]:
    """Render a header mapping as ``name:value`` lines in iteration order."""
    if not headers:
        return []
    return [f"{name}:{value}" for name, value in headers.items()]


def _merge_headers(
    defaults: Mapping[str, str],
    headers: Optional[Mapping[str, str]],
    cookie: Optional[str],
) -> Dict[str, str]:
    # Later sources win; names compare case-insensitively so each header is sent once.
    merged: Dict[str, Tuple[str, str]] = {}
    for source in (defaults, headers or {}):
        for name, value in source.items():
            merged[name.lower()] = (name, str(value))
    if cookie:
        merged["cookie"] = ("Cookie", cookie)
    return {name: value for name, value in merged.values()}


def _header_pairs(headers: Mapping[str, str]) -> List[Tuple[str, bytes]]:
    # httpx encodes str header values as ASCII; values are sent as UTF-8 bytes.
    return [(name, value.encode("utf-8")) for name, value in headers.items()]


def _describe(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def send(
    request: Request,
    *,
    config: Optional[ClientConfig] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Response:
    """Execute ``request`` with one blocking transfer and return its Response.

    Transport failures, buffer overflows and client initialization failures
    are reported through ``Response.reason`` and ``Response.error``.

    Raises:
        UnsupportedMethodError: if the request method is not GET.
    """
    if request.method is not HTTPMethod.GET:
        raise UnsupportedMethodError(f"Only GET requests can be executed, got {request.method.value}")

    config = config or ClientConfig()
    if request.unused_fields:
        logger.warning(
            "Ignoring request fields not supported for GET: %s",
            ", ".join(request.unused_fields),
        )

    target_url = with_query(request.url, request.params)
    merged_headers = _merge_headers(config.headers, request.headers, request.cookie)

    try:
        client = httpx.Client(follow_redirects=config.follow_redirects, transport=transport)
    except (httpx.InvalidURL, ValueError, OSError) as exc:
        logger.error("%s for %s: %s", INIT_FAILURE_REASON, target_url, exc)
        return Response(url=target_url, reason=INIT_FAILURE_REASON, error=TransferError(_describe(exc)))

    buffer = BufferAccumulator(max_size=config.max_body_bytes)
    status_code = STATUS_NOT_ATTEMPTED
    response_headers: Dict[str, str] = {}
    encoding: Optional[str] = None
    error: Optional[Exception] = None

    logger.debug("GET %s", target_url)
    started = time.perf_counter()
    try:
        with client.stream("GET", target_url, headers=_header_pairs(merged_headers)) as response:
            status_code = response.status_code
            response_headers = dict(response.headers)
            encoding = response.encoding
            for chunk in response.iter_bytes():
                buffer.append(chunk)
    except BufferOverflowError as exc:
        logger.warning("Aborted GET %s: %s", target_url, exc)
        error = exc
    except (httpx.RequestError, httpx.InvalidURL, UnicodeEncodeError) as exc:
        logger.warning("GET %s failed: %s", target_url, _describe(exc))
        error = exc
    finally:
        elapsed = time.perf_counter() - started
        client.close()

    try:
        # Bytes received before a transport error are kept; an overflow keeps none.
        content = "" if isinstance(error, BufferOverflowError) else buffer.text(encoding)
    finally:
        buffer.release()

    logger.debug("GET %s -> %s in %.3fs", target_url, status_code, elapsed)
    return Response(
        url=target_url,
        status_code=status_code,
        reason=_describe(error) if error is not None else "",
        content=content,
        elapsed=elapsed,
        headers=response_headers,
        error=error,
    )


def get(
    url: str,
    headers: Optional[Mapping[str, str]] = None,
    cookie: Optional[str] = None,
    *,
    params: Optional[Mapping[str, Any]] = None,
    config: Optional[ClientConfig] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Response:
    """Perform one synchronous HTTP GET.

    Only ``params`` are percent-encoded; ``url`` is passed through as given.
    """
    request = Request(
        url=url,
        method=HTTPMethod.GET,
        headers=headers or {},
        cookie=cookie,
        params=params or {},
    )
    return send(request, config=config, transport=transport)

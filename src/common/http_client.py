"""Shared async HTTP helpers used by registry clients.

Wraps a single GET on an aiohttp session with DEBUG traces and JSON decoding.
Transport failures (``aiohttp.ClientError``, ``asyncio.TimeoutError``) are not
handled here; callers decide how to report them.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

import aiohttp

from common.logging_utils import Timer, extra_context, is_debug_enabled, safe_url

logger = logging.getLogger(__name__)


async def get_json(
    session: aiohttp.ClientSession,
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
) -> Tuple[int, str, Optional[Any]]:
    """Perform one GET request and decode a JSON body.

    Args:
        session: Open aiohttp session.
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "npm").
        headers: Optional request headers.

    Returns:
        Tuple of (status_code, reason, parsed_json_or_none). The body is only
        decoded for 2xx responses; undecodable bodies yield None.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context,
                ),
            )
        response = await session.request("GET", url, headers=headers or {})
        try:
            status = response.status
            reason = response.reason or ""
            body = await response.read() if 200 <= status < 300 else b""
        finally:
            response.release()

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                outcome="success" if 200 <= status < 300 else "non_2xx",
                status_code=status,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context,
            ),
        )

    if not body:
        return status, reason, None
    try:
        return status, reason, json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.debug(
            "JSON decode error",
            extra=extra_context(
                event="parse",
                component="http_client",
                action="get_json",
                outcome="json_decode_error",
                status_code=status,
                target=safe_target,
            ),
        )
        return status, reason, None

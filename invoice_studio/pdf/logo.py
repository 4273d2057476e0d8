"""Logo sources and their resolution into drawable logo data.

Resolution is the only await in a render. Any fetch or decode problem is
logged and turned into `LogoUnavailable` so the placeholder is drawn instead.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import Optional, Union

import httpx

from invoice_studio.pdf import backend

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 10.0


@dataclass(frozen=True)
class LogoBytes:
    data: bytes = field(repr=False)
    width: int
    height: int


@dataclass(frozen=True)
class LogoUnavailable:
    reason: str = ""


Logo = Union[LogoBytes, LogoUnavailable]


@dataclass(frozen=True)
class InlineBytes:
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class FetchByUrl:
    url: str
    timeout: float = FETCH_TIMEOUT


@dataclass(frozen=True)
class NoLogo:
    pass


LogoSource = Union[InlineBytes, FetchByUrl, NoLogo]


def decode_logo(data: bytes) -> Logo:
    """Read the raster size; unreadable or empty images become LogoUnavailable."""
    backend.require_backend()
    try:
        width, height = backend.ImageReader(io.BytesIO(data)).getSize()
    except Exception as exc:
        logger.warning("Logo image could not be decoded: %s", exc)
        return LogoUnavailable(f"decode failed: {exc}")
    if not width or not height:
        logger.warning("Logo image has no area (%sx%s)", width, height)
        return LogoUnavailable("empty image")
    return LogoBytes(bytes(data), int(width), int(height))


async def fetch_logo_bytes(url: str, client: httpx.AsyncClient, timeout: float = FETCH_TIMEOUT) -> bytes:
    resp = await client.get(url, timeout=timeout, follow_redirects=True)
    resp.raise_for_status()
    return resp.content


async def resolve_logo(source: Optional[LogoSource], client: Optional[httpx.AsyncClient] = None) -> Logo:
    """Turn a LogoSource into a Logo. Never raises for fetch or decode failures."""
    if source is None or isinstance(source, NoLogo):
        return LogoUnavailable("no logo")
    if isinstance(source, InlineBytes):
        return decode_logo(source.data)
    if not isinstance(source, FetchByUrl):
        raise TypeError(f"Unsupported logo source: {source!r}")

    try:
        if client is not None:
            data = await fetch_logo_bytes(source.url, client, source.timeout)
        else:
            async with httpx.AsyncClient() as own_client:
                data = await fetch_logo_bytes(source.url, own_client, source.timeout)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Logo fetch failed for %s: %s; using placeholder", source.url, exc)
        return LogoUnavailable(f"fetch failed: {exc}")
    return decode_logo(data)

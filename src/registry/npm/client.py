"""NPM registry client: raw packument reads over aiohttp."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Dict, Optional, Tuple, cast

import aiohttp

from common.http_client import get_json
from constants import Constants

logger = logging.getLogger(__name__)


def package_path(pkg_name: str) -> str:
    """URL-encode a package name as a single path segment.

    Scoped names keep their scope: ``@types/node`` becomes ``%40types%2Fnode``.
    """
    return urllib.parse.quote(pkg_name, safe="")


class NpmRegistryClient:
    """Client for the two registry documents whatver reads."""

    def __init__(
        self,
        registry_url: str = Constants.REGISTRY_URL_NPM,
        timeout: int = Constants.REQUEST_TIMEOUT,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize the client.

        Args:
            registry_url: Registry base URL.
            timeout: Total request timeout in seconds.
            session: Pre-built session; the client will not close it.
        """
        self._registry_url = registry_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def start(self) -> None:
        """Start the HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers={"User-Agent": Constants.USER_AGENT},
            )
            self._owns_session = True

    async def stop(self) -> None:
        """Stop the HTTP session if this client opened it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    def versions_url(self, pkg_name: str) -> str:
        return f"{self._registry_url}/{package_path(pkg_name)}"

    def latest_url(self, pkg_name: str) -> str:
        return f"{self._registry_url}/{package_path(pkg_name)}/{Constants.NPM_LATEST_TAG}"

    async def get_versions_document(self, pkg_name: str) -> Tuple[int, str, Optional[Any]]:
        """GET the abbreviated packument listing every published version."""
        headers = {"Accept": Constants.NPM_INSTALL_ACCEPT}
        return await self._get(self.versions_url(pkg_name), headers)

    async def get_latest_document(self, pkg_name: str) -> Tuple[int, str, Optional[Any]]:
        """GET the full document of the ``latest`` dist-tag."""
        return await self._get(self.latest_url(pkg_name), {})

    async def _get(self, url: str, headers: Dict[str, str]) -> Tuple[int, str, Optional[Any]]:
        await self.start()
        return await get_json(cast(aiohttp.ClientSession, self._session), url, context="npm", headers=headers)

    async def __aenter__(self) -> "NpmRegistryClient":
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.stop()

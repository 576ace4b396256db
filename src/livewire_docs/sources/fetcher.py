"""HTTP retrieval of documentation pages.

A single synchronous ``httpx.Client`` is reused for a whole update run so
pages are fetched strictly one after another. Failures never propagate:
``fetch`` returns ``None`` and the caller decides whether to skip the page.
"""

import time

import httpx
from loguru import logger

from livewire_docs.config import settings

_BASE_DELAY = 1.0  # seconds, doubled per retry


class DocsClient:
    """Fetches raw HTML from the documentation site."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        retries: int | None = None,
    ):
        self.base_url = (base_url or settings.docs_base_url).rstrip("/")
        self._retries = settings.fetch_retries if retries is None else retries
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout or settings.request_timeout,
            follow_redirects=True,
            headers={
                "User-Agent": settings.user_agent,
                "Accept": "text/html,application/xhtml+xml",
            },
        )

    def __enter__(self) -> "DocsClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def fetch(self, path: str) -> str | None:
        """GET ``path`` and return the body, or None on any failure.

        Transport errors and 5xx responses are retried with exponential
        backoff; 4xx responses are final.
        """
        attempts = self._retries + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self._client.get(path)
                response.raise_for_status()
                return response.text

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                logger.warning(f"HTTP {status} for {path} (attempt {attempt}/{attempts})")
                if status < 500:
                    return None

            except httpx.HTTPError as e:
                logger.warning(
                    f"Request error for {path} (attempt {attempt}/{attempts}): {e}"
                )

            if attempt < attempts:
                delay = _BASE_DELAY * (2 ** (attempt - 1))
                logger.debug(f"Retrying {path} in {delay:.1f}s...")
                time.sleep(delay)

        logger.error(f"Giving up on {path} after {attempts} attempts")
        return None

    def close(self) -> None:
        self._client.close()

"""Shared fetch client for all page scrapers."""

import asyncio
from dataclasses import dataclass
from typing import Optional

import requests

from ..config import Settings
from ..errors import PageNotFound, PermanentFetchError, TransientFetchError
from ..logger import get_logger
from ..retry import Pause, call_with_retry, should_retry_http_status

logger = get_logger()


@dataclass(frozen=True)
class Page:
    url: str
    status: int
    text: str


class FetchClient:
    """
    Fetches documents one request at a time with retry and a fixed pause.

    The blocking ``requests`` call runs in a worker thread so many players
    can be in flight on one event loop. After every attempt, successful
    or not, the client waits ``settings.request_delay`` to bound the
    outbound request rate.

    Args:
        settings: Timeouts, delays, retry policy and User-Agent
        session: Object with a requests-style ``get`` (default: requests)
        pause: Awaitable sleep (default asyncio.sleep)
    """

    def __init__(self, settings: Settings, session=None, pause: Optional[Pause] = None):
        self.settings = settings
        self.session = session or requests
        self.pause = pause or asyncio.sleep

    async def fetch(self, url: str, timeout: Optional[float] = None, source: str = "page") -> Page:
        """Fetch ``url``, retrying transient failures.

        Raises:
            PageNotFound: 404/410, try the next candidate
            PermanentFetchError: other non-retryable HTTP errors
            RetryError: transient failures outlasted the retry budget
        """
        def _on_retry(attempt, exc, delay):
            logger.warning(
                f"{source.capitalize()} request failed, retrying",
                url=url, attempt=attempt, delay=delay, error=str(exc),
            )

        return await call_with_retry(
            self._fetch_once,
            url,
            timeout or self.settings.fetch_timeout,
            source,
            max_retries=self.settings.retry_attempts - 1,
            delay=self.settings.retry_delay,
            exceptions=(TransientFetchError,),
            on_retry=_on_retry,
            pause=self.pause,
        )

    async def _fetch_once(self, url: str, timeout: float, source: str) -> Page:
        logger.record_request()
        try:
            resp = await asyncio.to_thread(
                self.session.get,
                url,
                timeout=timeout,
                headers={"User-Agent": self.settings.user_agent},
            )
            resp.raise_for_status()
            return Page(url=url, status=resp.status_code, text=resp.text)
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else 0
            logger.record_error(f"HTTPError_{status}")
            if status in (404, 410):
                logger.debug(f"{source.capitalize()} URL not found", url=url, status=status)
                raise PageNotFound(f"{source.capitalize()} URL not found ({status}): {url}", url, status)
            if should_retry_http_status(status):
                raise TransientFetchError(f"{source.capitalize()} request failed ({status}): {url}", url, status)
            logger.error(f"{source.capitalize()} request failed", url=url, status=status)
            raise PermanentFetchError(f"{source.capitalize()} request failed ({status}): {url}", url, status)
        except requests.exceptions.Timeout:
            logger.record_error("Timeout")
            raise TransientFetchError(f"{source.capitalize()} request timed out: {url}", url)
        except requests.exceptions.ConnectionError as e:
            logger.record_error("ConnectionError")
            raise TransientFetchError(f"{source.capitalize()} connection error: {e}", url)
        except requests.exceptions.RequestException as e:
            logger.record_error("RequestException")
            logger.error(f"{source.capitalize()} request error", url=url, error=str(e))
            raise PermanentFetchError(f"{source.capitalize()} request error: {e}", url)
        finally:
            await self.pause(self.settings.request_delay)

"""
HTTP client for a LibreTranslate-compatible ``/translate`` endpoint.
"""

import asyncio
from typing import Optional

import aiohttp

from core.errors import UpstreamServiceError
from core.logging import get_logger

logger = get_logger("translate_client")

SERVICE_NAME = "Translation service"


class TranslationClient:

    def __init__(
        self,
        api_url: str,
        api_key: str = "",
        timeout: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def translate(self, text: str, target: str, source: str = "auto") -> str:
        """Translate ``text`` into ``target``.

        Raises:
            UpstreamServiceError: network failure, timeout, non-200 status or
                a response without ``translatedText``.
        """
        payload = {"q": text, "source": source, "target": target, "format": "text"}
        if self.api_key:
            payload["api_key"] = self.api_key

        session = self._get_session()
        try:
            async with session.post(self.api_url, json=payload, timeout=self.timeout) as resp:
                if resp.status != 200:
                    body = await resp.text()
                    raise UpstreamServiceError(SERVICE_NAME, f"HTTP {resp.status}: {body[:200]}")
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise UpstreamServiceError(SERVICE_NAME, repr(e)) from e

        translated = data.get("translatedText") if isinstance(data, dict) else None
        if not translated:
            raise UpstreamServiceError(SERVICE_NAME, "response without translatedText")

        logger.debug("translated", target=target, chars=len(text))
        return translated

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

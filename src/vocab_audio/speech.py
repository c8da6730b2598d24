from __future__ import annotations

from typing import Optional
from urllib.parse import quote

import requests

from .config import DEFAULT_TTS_URL, DEFAULT_USER_AGENT
from .errors import NetworkError


class SpeechFetcher(object):
    """Fetch MP3 speech for a piece of text from the translate TTS endpoint.

    One request per call, no retries; pacing is left to the caller.
    """

    def __init__(
        self,
        url: str = DEFAULT_TTS_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: Optional[float] = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"User-Agent": user_agent}

    @classmethod
    def from_config(cls, config, session=None) -> "SpeechFetcher":
        return cls(config.tts_url, config.user_agent, config.request_timeout, session=session)

    def build_url(self, text: str, lang: str) -> str:
        return f"{self.url}?ie=UTF-8&client=tw-ob&tl={quote(lang, safe='')}&q={quote(text, safe='')}"

    def fetch(self, text: str, lang: str) -> bytes:
        url = self.build_url(text, lang)
        try:
            resp = self.session.get(url, headers=self.headers, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise NetworkError(f'TTS request failed for "{text[:30]}" ({lang}): {exc}') from exc
        if not resp.content:
            raise NetworkError(f'TTS response for "{text[:30]}" ({lang}) has an empty body')
        return resp.content

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional
from urllib.parse import urlparse

import requests
from openai import OpenAI
from playwright.async_api import async_playwright

from app.constants import AudioConfig, TimeoutConfig, VideoConfig
from app.recipe.schema import TranscriptSource
from app.utils.cancellation import CancellationToken, raise_if_cancelled

VIDEO_SOURCE_SCRIPT = (
    'el => el.currentSrc || el.src || '
    '(el.querySelector("source") ? el.querySelector("source").src : null)'
)


@dataclass(frozen=True)
class MediaSource:
    """Direct media URL plus the headers the CDN expects on download."""
    url: str
    headers: Dict[str, str] = field(default_factory=dict)


class MediaTranscriber:
    def __init__(
        self,
        *,
        client_provider: Callable[[], OpenAI],
        model: str = AudioConfig.TRANSCRIBE_MODEL,
        render_timeout: float = TimeoutConfig.RENDER,
        download_timeout: float = TimeoutConfig.DOWNLOAD,
        transcribe_timeout: float = TimeoutConfig.TRANSCRIBE,
        max_bytes: int = AudioConfig.MAX_FILE_SIZE_BYTES,
    ):
        self.logger = logging.getLogger(__name__)
        self.client_provider = client_provider
        self.model = model
        self.render_timeout = render_timeout
        self.download_timeout = download_timeout
        self.transcribe_timeout = transcribe_timeout
        self.max_bytes = max_bytes

    async def __build_headers(self, context, page_url: str, media_url: str) -> Dict[str, str]:
        headers = {
            "User-Agent": VideoConfig.MOBILE_USER_AGENT,
            "Referer": page_url,
            "Accept": "*/*",
        }
        parsed = urlparse(media_url)
        if parsed.hostname:
            cookies = await context.cookies(f"{parsed.scheme}://{parsed.hostname}")
            cookie_header = "; ".join(
                f"{c['name']}={c['value']}" for c in cookies if c.get("name") and c.get("value")
            )
            if cookie_header:
                headers["Cookie"] = cookie_header
        return headers

    async def locate_media(self, page_url: str) -> Optional[MediaSource]:
        timeout_ms = self.render_timeout * 1000
        try:
            async with async_playwright() as pw:
                browser = await pw.chromium.launch(headless=True)
                try:
                    context = await browser.new_context(
                        user_agent=VideoConfig.MOBILE_USER_AGENT,
                        viewport={"width": 414, "height": 896},
                        locale="en-US",
                    )
                    page = await context.new_page()
                    await page.goto(page_url, wait_until="domcontentloaded", timeout=timeout_ms)
                    await page.wait_for_selector("video", timeout=timeout_ms)

                    media_url = await page.eval_on_selector("video", VIDEO_SOURCE_SCRIPT)
                    if not isinstance(media_url, str) or not media_url or media_url.startswith("blob:"):
                        self.logger.error(f"[Step 1] No downloadable video src on page: url={page_url}, src={media_url!r}")
                        return None

                    headers = await self.__build_headers(context, page.url, media_url)
                    return MediaSource(url=media_url, headers=headers)
                finally:
                    await browser.close()

        except Exception as e:
            self.logger.error(f"[Step 1] Headless render failed: url={page_url}, error={e}")
            return None

    def download_media(self, media: MediaSource) -> Optional[bytes]:
        try:
            with requests.get(media.url, headers=media.headers, stream=True, timeout=self.download_timeout) as resp:
                resp.raise_for_status()

                chunks = []
                size = 0
                for chunk in resp.iter_content(chunk_size=AudioConfig.DOWNLOAD_CHUNK_SIZE):
                    size += len(chunk)
                    if size > self.max_bytes:
                        self.logger.warning(f"[Step 2] Video exceeds {AudioConfig.MAX_FILE_SIZE_MB}MB, skipping transcription")
                        return None
                    chunks.append(chunk)

            content = b"".join(chunks)
            return content or None

        except requests.RequestException as e:
            self.logger.error(f"[Step 2] Video download failed: error={e}")
            return None

    def transcribe_audio(self, content: bytes) -> Optional[str]:
        # A missing API key is fatal, not a failed transcription
        client = self.client_provider()
        try:
            transcription = client.audio.transcriptions.create(
                model=self.model,
                file=(AudioConfig.UPLOAD_FILENAME, content, AudioConfig.UPLOAD_MIME_TYPE),
                timeout=self.transcribe_timeout,
            )
            text = getattr(transcription, "text", None)
            if not isinstance(text, str) or not text.strip():
                return None
            return text.strip()

        except Exception as e:
            self.logger.error(f"[Step 3] Transcription failed: model={self.model}, error={e}")
            return None

    async def transcribe(
        self,
        canonical_url: str,
        token: Optional[CancellationToken] = None,
    ) -> Optional[TranscriptSource]:
        raise_if_cancelled(token)
        media = await self.locate_media(canonical_url)
        if media is None:
            return None

        raise_if_cancelled(token)
        content = await asyncio.to_thread(self.download_media, media)
        if not content:
            return None

        raise_if_cancelled(token)
        text = await asyncio.to_thread(self.transcribe_audio, content)
        if not text:
            return None

        self.logger.info(f"[Step 3] Transcript ready: chars={len(text)}")
        return TranscriptSource(text=text)

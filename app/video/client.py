import logging
from typing import Optional

import requests

from app.constants import TimeoutConfig, VideoConfig
from app.video.platform import detect_platform, ensure_scheme


class VideoLinkClient:
    """Link resolution and oEmbed captions. Both calls degrade to None."""

    def __init__(
        self,
        resolve_timeout: float = TimeoutConfig.RESOLVE,
        describe_timeout: float = TimeoutConfig.DESCRIBE,
    ):
        self.logger = logging.getLogger(__name__)
        self.resolve_timeout = resolve_timeout
        self.describe_timeout = describe_timeout

    def resolve(self, url: str) -> Optional[str]:
        try:
            resp = requests.head(
                ensure_scheme(url),
                allow_redirects=True,
                headers={"User-Agent": VideoConfig.USER_AGENT},
                timeout=self.resolve_timeout,
            )
            # A refused HEAD on the final hop still yields the redirect target
            if resp.status_code >= 400:
                self.logger.warning(f"Link resolution ended on an error status: url={url}, final_url={resp.url}, status={resp.status_code}")
            return resp.url or None

        except requests.RequestException as e:
            self.logger.error(f"Error resolving video link: url={url}, error={e}")
            return None

    def describe(self, canonical_url: str) -> Optional[str]:
        platform = detect_platform(canonical_url)
        endpoint = VideoConfig.OEMBED_ENDPOINTS.get(platform or "")
        if not endpoint:
            self.logger.info(f"No oEmbed endpoint for link: platform={platform}, url={canonical_url}")
            return None

        try:
            resp = requests.get(
                endpoint,
                params={"url": canonical_url, "format": "json"},
                headers={
                    "User-Agent": VideoConfig.USER_AGENT,
                    "Accept": "application/json",
                },
                timeout=self.describe_timeout,
            )
            if not resp.ok:
                self.logger.error(f"Failed to fetch oEmbed: platform={platform}, status={resp.status_code}")
                return None

            data = resp.json()
            title = data.get("title") if isinstance(data, dict) else None
            if not isinstance(title, str) or not title.strip():
                return None
            return title.strip()

        except (requests.RequestException, ValueError) as e:
            self.logger.error(f"Error fetching video description: url={canonical_url}, error={e}")
            return None

from typing import Optional
from urllib.parse import urlparse


def ensure_scheme(url: str) -> str:
    """`tiktok.com/@chef/video/1` parses as a path without a scheme, so add one."""
    url = url.strip()
    if "://" in url:
        return url
    return f"https://{url}"


def extract_hostname(url: str) -> str:
    return (urlparse(ensure_scheme(url)).hostname or "").lower()


def _matches(host: str, domain: str) -> bool:
    return host == domain or host.endswith(f".{domain}")


def detect_platform(url: str) -> Optional[str]:
    host = extract_hostname(url)
    if not host:
        return None
    if _matches(host, "tiktok.com"):
        return "tiktok"
    if _matches(host, "youtube.com") or host == "youtu.be":
        return "youtube"
    if _matches(host, "instagram.com") or host == "ig.me":
        return "instagram"
    return None

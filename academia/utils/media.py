# academia/utils/media.py
import re
from typing import Optional

_YOUTUBE_PATTERNS = (
    re.compile(r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([a-zA-Z0-9_-]{11})"),
    re.compile(r"youtube\.com/.*[?&]v=([a-zA-Z0-9_-]{11})"),
)
_BARE_ID = re.compile(r"^[a-zA-Z0-9_-]{11}$")
_REMOTE = re.compile(r"^https?://", re.IGNORECASE)

VIDEO_EXTENSIONS = ("mp4", "mov", "avi", "mkv", "webm", "m3u8")


def extract_youtube_id(url: Optional[str]) -> Optional[str]:
    """Extrai o ID (11 chars) de uma URL do YouTube; aceita também o ID puro."""
    if not url:
        return None
    url = url.strip()
    for pattern in _YOUTUBE_PATTERNS:
        m = pattern.search(url)
        if m:
            return m.group(1)
    if _BARE_ID.match(url):
        return url
    return None


def is_youtube_url(url: Optional[str]) -> bool:
    if not url:
        return False
    return "youtube.com" in url or "youtu.be" in url


def detect_video_source(url: Optional[str]) -> str:
    """youtube | local | url"""
    if not url:
        return "url"
    if is_youtube_url(url):
        return "youtube"
    if url.startswith(("file://", "content://", "/")):
        return "local"
    return "url"


def is_valid_video_url(url: Optional[str]) -> bool:
    if not url:
        return False
    url = url.strip()
    if is_youtube_url(url):
        return extract_youtube_id(url) is not None
    if not _REMOTE.match(url):
        return False
    path = url.split("?", 1)[0].lower()
    ext = path.rsplit(".", 1)[-1] if "." in path.rsplit("/", 1)[-1] else ""
    # URLs de storage sem extensão (ex.: links assinados) são aceitas
    return ext == "" or ext in VIDEO_EXTENSIONS

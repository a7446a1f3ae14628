"""
Identity Resolver - maps user-supplied YouTube links to canonical video IDs.

A canonical video ID is exactly 11 characters from [A-Za-z0-9_-]. The resolver
is pure: the History Store calls it on every stored URL when comparing
identities, so it must stay cheap and side-effect free.
"""

import re
from typing import Optional

VIDEO_ID_LENGTH = 11

_ID = rf"[A-Za-z0-9_-]{{{VIDEO_ID_LENGTH}}}(?![A-Za-z0-9_-])"

# Structured URL shapes, tried before the bare-token fallback.
# The host must start the input or follow a scheme, subdomain or userinfo separator.
_URL_PATTERN = re.compile(
    r"(?:^|(?<=[/.@]))"
    r"(?:"
    r"(?:youtube(?:-nocookie)?\.com)/"
    r"(?:"
    r"(?:v|e|embed|shorts|live)/"
    r"|[^/\s?#]+/[^\s?#]+/"
    r"|\S*?[?&]v="
    r")"
    r"|youtu\.be/"
    r")"
    rf"({_ID})",
    re.IGNORECASE,
)

_BARE_PATTERN = re.compile(rf"[A-Za-z0-9_-]{{{VIDEO_ID_LENGTH}}}")

# Path segment of playlist embeds (/embed/videoseries?list=...), not a video
RESERVED_IDS = frozenset({"videoseries"})

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
EMBED_URL = "https://www.youtube.com/embed/{video_id}?autoplay=0&controls=1"


def resolve_video_id(raw: Optional[str]) -> Optional[str]:
    """
    Resolve an arbitrary string to a canonical video ID.

    Args:
        raw: Watch, short, embed or bare-ID input as pasted by the user

    Returns:
        The 11-character video ID, or None if nothing valid was found
    """
    if not raw:
        return None

    text = raw.strip()
    if not text:
        return None

    match = _URL_PATTERN.search(text)
    if match:
        video_id = match.group(1)
        return video_id if is_video_id(video_id) else None

    if is_video_id(text):
        return text

    return None


def is_video_id(value: Optional[str]) -> bool:
    """Check whether value is already a canonical video ID."""
    return bool(value) and value not in RESERVED_IDS and _BARE_PATTERN.fullmatch(value) is not None


def watch_url(video_id: str) -> str:
    """Normalized watch-page URL stored on newly created history records."""
    return WATCH_URL.format(video_id=video_id)


def embed_url(video_id: str) -> str:
    """Embed URL handed to the player surface."""
    return EMBED_URL.format(video_id=video_id)

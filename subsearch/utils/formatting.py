"""Display formatting shared by the search components."""

from __future__ import annotations

from urllib.parse import urljoin


def format_num(num: int) -> tuple[str, str]:
    """Return ``(abbreviated, exact)`` renderings of a count, e.g. ``("1.2k", "1234")``."""

    if num >= 1_000_000 or num <= -1_000_000:
        abbreviated = f"{num / 1_000_000:.1f}m"
    elif num >= 1000 or num <= -1000:
        abbreviated = f"{num / 1000:.1f}k"
    else:
        abbreviated = str(num)
    return abbreviated, str(num)


def format_url(url: str, base_url: str) -> str:
    """Normalize an upstream media URL into an absolute one."""

    url = (url or "").strip().replace("&amp;", "&")
    if not url:
        return ""
    if url.startswith("//"):
        return f"https:{url}"
    if url.startswith(("http://", "https://")):
        return url
    return urljoin(f"{base_url.rstrip('/')}/", url.lstrip("/"))


def escape_quotes(text: str) -> str:
    return text.replace('"', "&quot;")


__all__ = ["escape_quotes", "format_num", "format_url"]

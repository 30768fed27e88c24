from __future__ import annotations

from urllib.parse import urlsplit

import requests
import structlog

from .errors import ConfigError, FetchError

log = structlog.get_logger()


def expand_url(template: str, token: str = "") -> str:
    """Substitute the access token into a URL template and check the result."""
    try:
        url = template.format(token=token)
    except (KeyError, IndexError, ValueError) as exc:
        raise ConfigError(f"Bad URL template {template!r}: {exc}") from exc

    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise ConfigError(f"Can't parse URL {url!r}: {exc}") from exc
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"Can't parse URL {url!r}: expected an absolute http(s) URL")
    return url


def fetch_text(
    url: str,
    params: dict[str, str] | None = None,
    timeout: float = 30.0,
) -> str:
    """GET a URL and return the body as text."""
    try:
        resp = requests.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"GET {url} failed: {exc}") from exc

    log.debug("fetched", url=resp.url, status=resp.status_code, size=len(resp.text))
    return resp.text

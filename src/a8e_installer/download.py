# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""HTTPS retrieval of release archives."""

from __future__ import annotations

import logging
from collections.abc import Collection
from pathlib import Path
from typing import Final
from urllib.parse import urlparse

import requests
from urllib3.exceptions import ReadTimeoutError

from .checksums import CHUNK_SIZE
from .errors import DownloadError, DownloadTimeout

LOGGER = logging.getLogger(__name__)

HTTPS_SCHEME: Final[str] = "https"
MAX_REDIRECTS: Final[int] = 5
USER_AGENT: Final[str] = "a8e-installer"


def new_session() -> requests.Session:
    """Return a session with the redirect cap and user agent applied."""

    session = requests.Session()
    session.max_redirects = MAX_REDIRECTS
    session.headers["User-Agent"] = USER_AGENT
    return session


def ensure_allowed_url(url: str, allowed_hosts: Collection[str]) -> None:
    """Reject URLs that are not HTTPS or point outside ``allowed_hosts``.

    An empty ``allowed_hosts`` collection permits any HTTPS host.

    Raises:
        DownloadError: If the URL is not eligible for download.
    """

    parsed = urlparse(url)
    if parsed.scheme != HTTPS_SCHEME:
        raise DownloadError(f"Refusing non-HTTPS download URL: {url}")
    host = (parsed.hostname or "").lower()
    if allowed_hosts and host not in allowed_hosts:
        raise DownloadError(f"Unexpected download host {host!r} for {url}")


def download_to_file(
    url: str,
    destination: Path,
    *,
    timeout: float,
    allowed_hosts: Collection[str] = (),
    session: requests.Session | None = None,
) -> int:
    """Stream ``url`` into ``destination`` and return the number of bytes written.

    The request honours ``timeout`` for both connecting and reading. Redirects
    are followed up to :data:`MAX_REDIRECTS` and the final location must still
    satisfy :func:`ensure_allowed_url`.

    Args:
        url: HTTPS artifact URL.
        destination: File receiving the response body; the caller owns cleanup.
        timeout: Seconds to wait for the connection and between received bytes.
        allowed_hosts: Hosts permitted for the initial and final URL.
        session: Optional session to reuse; a private one is created and closed otherwise.

    Returns:
        int: Size of the downloaded payload in bytes.

    Raises:
        DownloadTimeout: If the server does not respond within ``timeout``.
        DownloadError: For any other network, HTTP, or local write failure.
    """

    ensure_allowed_url(url, allowed_hosts)
    LOGGER.debug("Downloading %s", url)
    owned = session is None
    http = session if session is not None else new_session()
    try:
        with http.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            ensure_allowed_url(response.url or url, allowed_hosts)
            written = 0
            with destination.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        handle.write(chunk)
                        written += len(chunk)
    except requests.Timeout as exc:
        raise DownloadTimeout(f"Timed out after {timeout:g}s downloading {url}") from exc
    except requests.ConnectionError as exc:
        if _is_read_timeout(exc):
            raise DownloadTimeout(f"Stalled for {timeout:g}s while downloading {url}") from exc
        raise DownloadError(f"Failed to download {url}: {exc}") from exc
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else "unknown"
        raise DownloadError(f"HTTP {status} while downloading {url}") from exc
    except requests.RequestException as exc:
        raise DownloadError(f"Failed to download {url}: {exc}") from exc
    except OSError as exc:
        raise DownloadError(f"Failed to write {destination}: {exc}") from exc
    finally:
        if owned:
            http.close()
    LOGGER.debug("Downloaded %d bytes from %s", written, url)
    return written


def _is_read_timeout(exc: BaseException) -> bool:
    """Return ``True`` when a read timeout sits anywhere in ``exc``'s chain.

    ``requests`` re-raises body read timeouts from ``iter_content`` as
    :class:`requests.ConnectionError` wrapping urllib3's error.
    """

    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, (ReadTimeoutError, requests.Timeout)):
            return True
        if any(isinstance(arg, ReadTimeoutError) for arg in current.args):
            return True
        current = current.__cause__ or current.__context__
    return False


__all__ = ["MAX_REDIRECTS", "download_to_file", "ensure_allowed_url", "new_session"]

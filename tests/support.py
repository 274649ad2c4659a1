# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Archive builders and HTTP fakes shared by the test modules."""

from __future__ import annotations

import io
import tarfile
from collections.abc import Iterator, Mapping

import requests
from urllib3.exceptions import ReadTimeoutError

from a8e_installer.platform import PlatformKey

VERSION = "2.3.1"
LINUX_X86 = PlatformKey.parse("linux/x86_64")


def build_archive(members: Mapping[str, bytes], *, mode: int = 0o755, compression: str = "bz2") -> bytes:
    """Return an in-memory tar archive holding ``members``."""

    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode=f"w:{compression}") as archive:
        for name, payload in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(payload)
            info.mode = mode
            archive.addfile(info, io.BytesIO(payload))
    return buffer.getvalue()


def version_script(reported: str) -> bytes:
    """Return a shell script that prints ``a8e <reported>``."""

    return f'#!/bin/sh\necho "a8e {reported}"\n'.encode()


class FakeResponse:
    """Minimal stand-in for a streamed :class:`requests.Response`."""

    def __init__(self, payload: bytes, *, url: str, status_code: int = 200) -> None:
        self._payload = payload
        self.url = url
        self.status_code = status_code

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        for start in range(0, len(self._payload), chunk_size):
            yield self._payload[start : start + chunk_size]


class FakeSession:
    """Serve canned payloads, or raise canned errors, for every GET."""

    def __init__(
        self,
        payload: bytes = b"",
        *,
        status_code: int = 200,
        error: Exception | None = None,
        final_url: str | None = None,
        failures: int = 0,
        response: requests.Response | None = None,
    ) -> None:
        self.payload = payload
        self.response = response
        self.status_code = status_code
        self.error = error
        self.final_url = final_url
        self.failures = failures
        self.calls: list[tuple[str, float]] = []
        self.closed = False

    def get(self, url: str, *, stream: bool, timeout: float) -> FakeResponse | requests.Response:
        self.calls.append((url, timeout))
        if self.error is not None and (self.failures == 0 or len(self.calls) <= self.failures):
            raise self.error
        if self.response is not None:
            return self.response
        return FakeResponse(self.payload, url=self.final_url or url, status_code=self.status_code)

    def close(self) -> None:
        self.closed = True


class StallingRaw:
    """urllib3-like body that yields ``head`` and then times out."""

    def __init__(self, head: bytes) -> None:
        self.head = head
        self.closed = False

    def stream(self, amt: int, decode_content: bool = True) -> Iterator[bytes]:
        yield self.head
        raise ReadTimeoutError(None, "/a8e.tar.bz2", "Read timed out.")

    def close(self) -> None:
        self.closed = True


def stalling_response(url: str, head: bytes = b"partial") -> requests.Response:
    """Return a real :class:`requests.Response` whose body stalls after ``head``."""

    response = requests.Response()
    response.status_code = 200
    response.url = url
    response.raw = StallingRaw(head)
    return response

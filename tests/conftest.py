"""Test configuration and fixtures"""

import pytest
import requests

from albumsync.config import Config

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 64


class FakeResponse:
    """Stands in for requests.Response, including streamed bodies."""

    def __init__(self, status_code=200, json_data=None, content=b"", fail_after=None):
        self.status_code = status_code
        self._json = json_data
        self.content = content
        self.text = "" if json_data is None else str(json_data)
        self.fail_after = fail_after
        self.closed = False

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.content), chunk_size):
            if self.fail_after is not None and start >= self.fail_after:
                raise requests.ConnectionError("connection reset")
            yield self.content[start:start + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


class FakeSession:
    """
    Replays scripted API responses in order and serves downloads by URL.
    Every call is recorded for assertions.
    """

    def __init__(self, api_responses=None, downloads=None):
        self.api_responses = list(api_responses or [])
        self.downloads = dict(downloads or {})
        self.api_calls = []
        self.download_calls = []

    def request(self, method, url, timeout=None, **kwargs):
        self.api_calls.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        result = self.api_responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def get(self, url, stream=False, timeout=None):
        self.download_calls.append(url)
        result = self.downloads.get(url, FakeResponse(status_code=404))
        if isinstance(result, Exception):
            raise result
        return result


def media_page(ids, next_token=None):
    """Build a mediaItems:search response for the given ids."""
    data = {
        "mediaItems": [
            {"id": mid, "baseUrl": f"https://lh3.example.com/{mid}"} for mid in ids
        ]
    }
    if next_token:
        data["nextPageToken"] = next_token
    return FakeResponse(json_data=data)


def download_url(mid):
    return f"https://lh3.example.com/{mid}=d"


@pytest.fixture
def mirror_dir(tmp_path):
    """Empty mirror folder"""
    path = tmp_path / "mirror"
    path.mkdir()
    return path


@pytest.fixture
def sync_config(mirror_dir):
    return Config(album_id="album-1", output_path=str(mirror_dir))

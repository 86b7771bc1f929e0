import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

import requests

logger = logging.getLogger(__name__)

API_ROOT = "https://photoslibrary.googleapis.com/v1"

PAGE_SIZE = 100
ALBUM_PAGE_SIZE = 50
HTTP_TIMEOUT = 5 * 60  # seconds


class PhotosApiError(Exception):
    """A Google Photos request failed; the current command cannot go on."""


@dataclass(frozen=True)
class MediaItem:
    id: str
    base_url: str

    @classmethod
    def from_json(cls, data: dict) -> "MediaItem":
        return cls(id=data["id"], base_url=data.get("baseUrl", ""))


@dataclass(frozen=True)
class Album:
    id: str
    title: str

    @classmethod
    def from_json(cls, data: dict) -> "Album":
        return cls(id=data["id"], title=data.get("title", ""))


class PhotosClient:
    """
    Thin wrapper over the Google Photos Library REST API.

    The session is built by the caller (normally an AuthorizedSession) and
    reused for every request so connections are pooled.
    """

    def __init__(self, session: requests.Session, timeout: float = HTTP_TIMEOUT):
        self.session = session
        self.timeout = timeout

    def _request(self, method: str, url: str, **kwargs) -> dict:
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise PhotosApiError(f"{method} {url} failed: {e}") from e

        if resp.status_code != 200:
            raise PhotosApiError(f"{method} {url} returned {resp.status_code}: {resp.text}")

        try:
            return resp.json()
        except ValueError as e:
            raise PhotosApiError(f"{method} {url} returned invalid JSON: {e}") from e

    def search_media_items(self, album_id: str, page_size: int = PAGE_SIZE,
                           page_token: Optional[str] = None) -> dict:
        """
        Call mediaItems:search for one page of an album.
        Returns the decoded JSON response.
        """
        body = {
            "albumId": album_id,
            "pageSize": page_size,
        }
        if page_token:
            body["pageToken"] = page_token
        return self._request("POST", f"{API_ROOT}/mediaItems:search", json=body)

    def iter_album_pages(self, album_id: str, page_size: int = PAGE_SIZE) -> Iterator[List[MediaItem]]:
        """
        Yield the album's media items one page at a time, following
        nextPageToken until the API stops returning one.
        """
        next_page_token = None

        while True:
            data = self.search_media_items(album_id, page_size, next_page_token)
            items = [MediaItem.from_json(item) for item in data.get("mediaItems", [])]
            logger.debug("Fetched page of %d item(s) from album %s", len(items), album_id)
            yield items

            next_page_token = data.get("nextPageToken")
            if not next_page_token:
                break

    def list_albums(self, page_size: int = ALBUM_PAGE_SIZE) -> List[Album]:
        """
        List all albums (paginated). Returns a list of Album.
        """
        albums = []
        page_token = None

        while True:
            params = {"pageSize": page_size}
            if page_token:
                params["pageToken"] = page_token

            data = self._request("GET", f"{API_ROOT}/albums", params=params)
            albums.extend(Album.from_json(a) for a in data.get("albums", []))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return albums

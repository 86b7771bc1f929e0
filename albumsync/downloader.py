import logging
from pathlib import Path
from typing import Optional

import requests

from albumsync.google_photos_api import HTTP_TIMEOUT

logger = logging.getLogger(__name__)

# Appended to a media item's baseUrl to fetch the original bytes.
DOWNLOAD_SUFFIX = "=d"
CHUNK_SIZE = 64 * 1024


class DownloadError(Exception):
    """A single media item could not be downloaded."""


def _already_present(path: Path) -> bool:
    try:
        return path.stat().st_size > 0
    except FileNotFoundError:
        return False
    except OSError as e:
        raise DownloadError(f"Cannot check {path}: {e}") from e


class Downloader:
    """
    Fetches media items into the mirror folder.
    Skips targets that already exist, so re-running is cheap.
    """

    def __init__(self, session: requests.Session, timeout: float = HTTP_TIMEOUT):
        self.session = session
        self.timeout = timeout

    def download(self, path: Path, base_url: str) -> Optional[int]:
        """
        Download base_url to path unless a non-empty file is already there.

        Returns the number of bytes written, or None when the download was
        skipped. On failure the partial file is removed and DownloadError
        is raised; a target that cannot even be stat'ed raises it too.
        """
        if _already_present(path):
            return None

        url = f"{base_url}{DOWNLOAD_SUFFIX}"
        written = 0
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as resp:
                resp.raise_for_status()
                with open(path, "wb") as f:
                    for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                        f.write(chunk)
                        written += len(chunk)
        except (requests.RequestException, OSError) as e:
            self._discard_partial(path)
            raise DownloadError(f"Failed to download {path.name}: {e}") from e

        logger.info("Downloaded '%s' (%d)", path, written)
        return written

    @staticmethod
    def _discard_partial(path: Path):
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error("Failed to remove partial download %s: %s", path, e)

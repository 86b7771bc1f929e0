import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from albumsync.config import Config
from albumsync.downloader import Downloader, DownloadError
from albumsync.google_photos_api import Album, PhotosClient, PAGE_SIZE
from albumsync.local_store import (
    scan_local_images,
    image_path,
    delete_local_file,
)

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    remote_items: int = 0
    downloaded: int = 0
    skipped: int = 0
    download_failed: int = 0
    deleted: int = 0
    delete_failed: int = 0


class AlbumSync:
    """
    Mirrors one Google Photos album into a local folder:
     - download items the folder is missing
     - delete local images that left the album
    """

    def __init__(self, config: Config, client: PhotosClient, downloader: Downloader,
                 page_size: int = PAGE_SIZE):
        self.config = config
        self.client = client
        self.downloader = downloader
        self.page_size = page_size

    def sync_album(self) -> SyncReport:
        """
        Run one reconciliation pass.

        Local images are indexed first. Every remote item is then removed
        from that index and handed to the downloader. Whatever is left in
        the index once the listing is exhausted gets deleted.
        PhotosApiError and OSError from the folder listing propagate.
        """
        self.config.validate_for_sync()
        output_path = Path(self.config.output_path)
        report = SyncReport()

        # 1) Index local images
        local_only = scan_local_images(output_path)

        # 2) Drain the remote listing
        logger.info("Downloading images...")
        for page in self.client.iter_album_pages(self.config.album_id, self.page_size):
            for item in page:
                report.remote_items += 1
                local_only.discard(item.id)
                self._download(output_path, item.id, item.base_url, report)

        # 3) Sweep whatever was never seen remotely
        logger.info("Delete missing images...")
        for media_id in sorted(local_only):
            if delete_local_file(image_path(output_path, media_id)):
                report.deleted += 1
                logger.info("%s deleted", media_id)
            else:
                report.delete_failed += 1

        logger.info(
            "Sync done: %d remote item(s), %d downloaded, %d already present, "
            "%d failed, %d deleted, %d delete failure(s)",
            report.remote_items, report.downloaded, report.skipped,
            report.download_failed, report.deleted, report.delete_failed,
        )
        return report

    def _download(self, output_path: Path, media_id: str, base_url: str, report: SyncReport):
        path = image_path(output_path, media_id)
        try:
            written = self.downloader.download(path, base_url)
        except DownloadError as e:
            report.download_failed += 1
            logger.error("Failed to download: %s", e)
            return

        if written is None:
            report.skipped += 1
        else:
            report.downloaded += 1

    def list_albums(self) -> List[Album]:
        """
        Log every album as "<id> <title>" and return them.
        """
        albums = self.client.list_albums()
        for album in albums:
            logger.info("%s %s", album.id, album.title)
        return albums

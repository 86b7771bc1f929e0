#!/usr/bin/env python3
"""
Entry point for the album sync tool.
"""

import argparse
import logging
import sys

import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession

from albumsync.auth import AuthManager
from albumsync.config import ConfigError, DEFAULT_CONFIG_FILE, load_config
from albumsync.downloader import Downloader
from albumsync.google_photos_api import PhotosApiError, PhotosClient
from albumsync.syncer import AlbumSync

SYNC_IMAGE = "SyncImage"
LIST_ALBUM = "ListAlbum"

logger = logging.getLogger("albumsync")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Mirror a Google Photos album into a local folder.")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG_FILE), help="path to config.yml")
    parser.add_argument("--command", default=SYNC_IMAGE, choices=[SYNC_IMAGE, LIST_ALBUM],
                        help="command to execute")
    return parser.parse_args(argv)


def build_syncer(config) -> AlbumSync:
    creds = AuthManager(config).authenticate()

    # baseUrl hosts get no bearer token
    api_session = AuthorizedSession(creds)
    download_session = requests.Session()
    return AlbumSync(config, PhotosClient(api_session), Downloader(download_session))


def run(args, build=None) -> int:
    config = load_config(args.config)
    if args.command == SYNC_IMAGE:
        config.validate_for_sync()
    syncer = (build or build_syncer)(config)

    if args.command == SYNC_IMAGE:
        syncer.sync_album()
    elif args.command == LIST_ALBUM:
        syncer.list_albums()
    return 0


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stdout,
    )
    args = parse_args(argv)
    logger.info("Starting album sync")

    try:
        status = run(args)
    except (ConfigError, GoogleAuthError, PhotosApiError, OSError) as e:
        logger.error("Fatal: %s", e)
        return 1

    logger.info("Good bye...")
    return status


if __name__ == "__main__":
    sys.exit(main())

import logging
from pathlib import Path
from typing import Set

logger = logging.getLogger(__name__)

IMAGE_SUFFIX = ".jpg"
SNIFF_LENGTH = 512
JPEG_SIGNATURE = b"\xff\xd8\xff"


def image_path(output_path, media_id: str) -> Path:
    """
    Local path for a media item: {output_path}/{id}.jpg
    """
    return Path(output_path) / f"{media_id}{IMAGE_SUFFIX}"


def is_valid_image(path: Path) -> bool:
    """
    Sniff the first bytes of the file and check they look like a JPEG.
    Open/read errors are logged and count as "not an image".
    """
    try:
        with open(path, "rb") as f:
            head = f.read(SNIFF_LENGTH)
    except OSError as e:
        logger.warning("Failed to read image %s: %s", path, e)
        return False
    return head.startswith(JPEG_SIGNATURE)


def scan_local_images(output_path) -> Set[str]:
    """
    Return the ids of every valid image in the mirror folder.

    Only non-empty regular *.jpg files whose content is a JPEG are counted;
    anything else is left alone. Failing to list the folder raises OSError.
    """
    ids = set()
    for entry in Path(output_path).iterdir():
        if entry.suffix != IMAGE_SUFFIX or not entry.is_file():
            continue
        try:
            size = entry.stat().st_size
        except OSError as e:
            logger.warning("Failed to stat %s: %s", entry, e)
            continue
        if size == 0:
            continue
        if not is_valid_image(entry):
            continue
        ids.add(entry.stem)

    logger.info("Found %d local image(s) in %s", len(ids), output_path)
    return ids


def delete_local_file(path: Path) -> bool:
    """
    Delete a local file. Errors are logged, not raised.
    """
    try:
        path.unlink()
    except OSError as e:
        logger.error("Failed to delete local file %s: %s", path, e)
        return False
    return True

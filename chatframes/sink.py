"""Writes frames to a local directory and optionally uploads them (caller side of the pipeline)."""

import logging
import os
import time
import uuid
from dataclasses import dataclass
from typing import Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

logger = logging.getLogger(__name__)


def frame_prefix():
    return f"{int(time.time() * 1000)}_{uuid.uuid4()}"


class DirectoryFrameSink:
    """Stores frames as PNG files named ``{prefix}_{index:03d}.png``."""

    def __init__(self, directory, prefix=None):
        self.directory = directory
        self.prefix = prefix or frame_prefix()
        os.makedirs(directory, exist_ok=True)

    def path_for(self, index):
        return os.path.join(self.directory, f"{self.prefix}_{index:03d}.png")

    def write(self, frame):
        path = self.path_for(frame.index)
        frame.image.save(path, format="PNG")
        logger.debug("Wrote frame %d to %s", frame.index, path)
        return path

    def write_all(self, frames):
        return [self.write(f) for f in frames]


def prune_old_frames(directory, max_age_seconds, now=None):
    """Delete regular files in ``directory`` older than ``max_age_seconds``."""
    now = time.time() if now is None else now
    deleted = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if not entry.is_file():
                continue
            if now - entry.stat().st_mtime > max_age_seconds:
                os.unlink(entry.path)
                deleted.append(entry.path)
                logger.info("Deleted old file: %s", entry.path)
    return deleted


def configure_cloudinary():
    """Configure the Cloudinary client from the environment.

    Uses CLOUDINARY_URL when set, otherwise CLOUDINARY_CLOUD_NAME,
    CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET. Returns whether a cloud
    name is configured.
    """
    if os.environ.get("CLOUDINARY_URL"):
        cloudinary.reset_config()
        cloudinary.config(secure=True)
    elif os.environ.get("CLOUDINARY_CLOUD_NAME"):
        cloudinary.config(
            cloud_name=os.environ["CLOUDINARY_CLOUD_NAME"],
            api_key=os.environ.get("CLOUDINARY_API_KEY"),
            api_secret=os.environ.get("CLOUDINARY_API_SECRET"),
            secure=True,
        )
    return cloudinary_configured()


def cloudinary_configured():
    return bool(cloudinary.config().cloud_name)


def cloudinary_upload(path):
    if not cloudinary_configured():
        raise CloudinaryError("Cloudinary is not configured")
    return cloudinary.uploader.upload(path, resource_type="image")


@dataclass(frozen=True)
class StoredFrame:
    """Where a frame ended up: a remote ``url`` or a ``local`` file path."""

    index: int
    url: Optional[str] = None
    local: Optional[str] = None


class UploadingFrameSink(DirectoryFrameSink):
    """Writes frames locally and, when ``upload`` is set, uploads each one.

    A successful upload removes the local file. A failed upload keeps it and
    reports the local path instead.
    """

    def __init__(self, directory, upload=False, prefix=None, uploader=None):
        super().__init__(directory, prefix)
        self.upload = upload
        self.uploader = uploader or cloudinary_upload

    def store(self, frame):
        path = self.write(frame)
        if not self.upload:
            return StoredFrame(frame.index, local=path)
        try:
            result = self.uploader(path)
        except (CloudinaryError, OSError) as e:
            logger.warning("Upload of frame %d failed (%s), keeping %s", frame.index, e, path)
            return StoredFrame(frame.index, local=path)
        url = (result or {}).get("secure_url")
        if not url:
            logger.warning("Upload of frame %d returned no url, keeping %s", frame.index, path)
            return StoredFrame(frame.index, local=path)
        try:
            os.unlink(path)
        except OSError as e:
            logger.debug("Could not remove uploaded frame %s: %s", path, e)
        logger.info("Uploaded frame %d to %s", frame.index, url)
        return StoredFrame(frame.index, url=url)

    def store_all(self, frames):
        return [self.store(f) for f in frames]

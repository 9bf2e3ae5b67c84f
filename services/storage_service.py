import asyncio
import io
import logging
import time
import uuid

import cloudinary
import cloudinary.uploader

from config import CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET, CLOUDINARY_CLOUD_NAME, UPLOAD_FOLDER
from utils.errors import StorageError

logger = logging.getLogger(__name__)

cloudinary.config(
    cloud_name=CLOUDINARY_CLOUD_NAME or None,
    api_key=CLOUDINARY_API_KEY or None,
    api_secret=CLOUDINARY_API_SECRET or None,
    secure=True,
)


def build_upload_path(folder: str = UPLOAD_FOLDER) -> str:
    """Suggested storage path: <folder>/<timestamp>-<random suffix>."""
    return f"{folder}/{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def _upload(file_bytes: bytes, suggested_path: str) -> dict:
    folder, _, public_id = suggested_path.rpartition("/")
    return cloudinary.uploader.upload(
        io.BytesIO(file_bytes),
        folder=folder or None,
        public_id=public_id,
        resource_type="image",
        unique_filename=True,
        overwrite=False,
    )


async def store_image(file_bytes: bytes, suggested_path: str) -> str:
    """
    Store uploaded image bytes and return their public URL.

    Raises:
        StorageError: If storage is not configured or the upload fails
    """
    if not (CLOUDINARY_CLOUD_NAME and CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET):
        raise StorageError("Image storage is not configured")

    try:
        result = await asyncio.to_thread(_upload, file_bytes, suggested_path)
    except Exception as e:
        logger.error(f"Error uploading image to storage: {str(e)}")
        raise StorageError() from e

    url = result.get("secure_url") or result.get("url")
    if not url:
        raise StorageError()

    logger.info(f"Stored image at {url}")
    return url

from __future__ import annotations

import io
import logging

from minio import Minio

import config

log = logging.getLogger(__name__)

IMAGE_CONTENT_TYPE = "image/jpeg"


class StorageClient:
    """
    Uploads image blobs to a single bucket.

    The wrapped `Minio` handle is created once and shared by every request;
    nothing on this object is mutated after construction.
    """

    def __init__(self, minio_client: Minio, bucket_name: str):
        self._client = minio_client
        self._bucket_name = bucket_name

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    def put_image(self, object_name: str, data: bytes) -> str:
        """
        Uploads raw JPEG bytes under `object_name` and returns the object name.

        The bucket is expected to exist already. Errors from the storage
        backend propagate to the caller.
        """
        self._client.put_object(
            self._bucket_name,
            object_name,
            io.BytesIO(data),
            len(data),
            content_type=IMAGE_CONTENT_TYPE,
        )
        log.info("Uploaded image to %s/%s (%d bytes)", self._bucket_name, object_name, len(data))
        return object_name


def get_storage_client() -> StorageClient:
    """
    Returns a StorageClient for the configured endpoint, region and bucket.
    """
    minio_client = Minio(
        config.S3_ENDPOINT,
        access_key=config.AWS_ACCESS_KEY_ID,
        secret_key=config.AWS_SECRET_ACCESS_KEY,
        region=config.AWS_REGION,
        secure=config.S3_SECURE,
    )
    return StorageClient(minio_client, config.S3_BUCKET_NAME)

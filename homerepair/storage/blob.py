"""Image uploads to S3."""

import base64
import binascii
import re
import time
import uuid
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_s3.client import S3Client

from homerepair.exceptions import ExternalServiceError, ValidationError
from homerepair.storage.config import get_blob_storage_settings
from homerepair.utils.logger import logger

DEFAULT_CONTENT_TYPE = "image/jpeg"

_DATA_URL_PREFIX = re.compile(r"^data:(image/[a-z0-9.+-]+)?(;base64)?,", re.IGNORECASE)


@lru_cache(maxsize=1)
def get_s3_client() -> S3Client:
    """
    Get a cached S3 client instance.

    Returns:
        S3Client: Boto3 S3 client
    """
    settings = get_blob_storage_settings()
    logger.info(f"[S3 Client] Initializing S3 client in region: {settings.region}")
    return boto3.client(
        "s3", region_name=settings.region, endpoint_url=settings.endpoint_url
    )


def decode_image_payload(image_data: str) -> tuple[bytes, str]:
    """
    Decode a base64 image, with or without a ``data:image/...;base64,`` prefix.

    Returns:
        tuple: (image bytes, content type)

    Raises:
        ValidationError: If the payload is not valid base64
    """
    content_type = DEFAULT_CONTENT_TYPE
    payload = image_data.strip()
    match = _DATA_URL_PREFIX.match(payload)
    if match:
        content_type = (match.group(1) or DEFAULT_CONTENT_TYPE).lower()
        payload = payload[match.end():]

    try:
        image_bytes = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("imageData must be valid base64") from e
    if not image_bytes:
        raise ValidationError("imageData must be valid base64")
    return image_bytes, content_type


class BlobStorage:
    """Stores uploaded repair photos and hands out short-lived read URLs."""

    def __init__(self, s3_client: S3Client | None = None):
        self.settings = get_blob_storage_settings()
        self.s3 = s3_client or get_s3_client()

    def upload_image(self, image_data: str) -> str:
        """
        Upload a base64 image and return a presigned GET URL for it.

        Raises:
            ValidationError: If the payload is not valid base64
            ExternalServiceError: If the upload fails
        """
        image_bytes, content_type = decode_image_payload(image_data)
        key = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}.jpg"
        try:
            self.s3.put_object(
                Bucket=self.settings.bucket,
                Key=key,
                Body=image_bytes,
                ContentType=content_type,
            )
            url = self.s3.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.settings.bucket, "Key": key},
                ExpiresIn=self.settings.url_expiry_seconds,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "Image upload failed", bucket=self.settings.bucket, key=key, error=str(e)
            )
            raise ExternalServiceError("Image upload failed", "blob", e) from e

        logger.info(
            "Uploaded image", bucket=self.settings.bucket, key=key, size=len(image_bytes)
        )
        return url

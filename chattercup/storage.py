"""
Object storage for profile photos.

Photos live in a public Cloudflare R2 bucket reached through the S3 API;
the stored value is the public URL, not a presigned one.
"""

import logging

import boto3
from botocore.config import Config

from . import config

logger = logging.getLogger(__name__)

PHOTO_CACHE_CONTROL = "public, max-age=3600"


def get_r2_client():
    """Create and return an R2 client."""
    return boto3.client(
        "s3",
        endpoint_url=f"https://{config.R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
        aws_access_key_id=config.R2_ACCESS_KEY_ID,
        aws_secret_access_key=config.R2_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4"),
        region_name="auto",
    )


def public_url(key: str) -> str:
    """Public URL for an object key in the profile photo bucket."""
    base = config.R2_PUBLIC_BASE_URL.rstrip("/")
    if not base:
        base = f"https://{config.R2_BUCKET_NAME}.{config.R2_ACCOUNT_ID}.r2.dev"
    return f"{base}/{key}"


def upload_public_object(key: str, body: bytes, content_type: str) -> str:
    """Upload bytes under key and return the object's public URL."""
    r2 = get_r2_client()
    r2.put_object(
        Bucket=config.R2_BUCKET_NAME,
        Key=key,
        Body=body,
        ContentType=content_type,
        CacheControl=PHOTO_CACHE_CONTROL,
    )
    logger.info(f"✅ Uploaded object to R2: {key}")
    return public_url(key)

from __future__ import annotations

import logging
import uuid
from typing import BinaryIO

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from app.core.config import settings
from app.schemas.file import DownloadLink

logger = logging.getLogger(__name__)

PAYMENT_PROOF_PREFIX = "payment-proofs"


def _get_s3_client():
    return boto3.client(
        "s3",
        endpoint_url=settings.s3_endpoint,
        aws_access_key_id=settings.s3_access_key,
        aws_secret_access_key=settings.s3_secret_key,
        region_name=settings.s3_region,
        config=Config(signature_version="s3v4"),
    )


def ensure_bucket_exists(bucket: str) -> None:
    s3 = _get_s3_client()
    try:
        s3.head_bucket(Bucket=bucket)
    except ClientError:
        logger.info("Creating bucket %s", bucket)
        s3.create_bucket(Bucket=bucket)


def build_object_key(prefix: str, original_name: str) -> str:
    safe_name = original_name.replace("/", "_").replace("\\", "_")
    return f"{prefix}/{uuid.uuid4()}-{safe_name}"


def upload_stream(fileobj: BinaryIO, original_name: str, content_type: str, prefix: str = "uploads") -> str:
    """
    Upload a file object to the configured bucket and return its object key.
    """
    bucket = settings.s3_bucket
    ensure_bucket_exists(bucket)

    s3 = _get_s3_client()
    object_key = build_object_key(prefix, original_name)

    s3.upload_fileobj(
        Fileobj=fileobj,
        Bucket=bucket,
        Key=object_key,
        ExtraArgs={"ContentType": content_type},
    )
    logger.info("Stored %s in %s", object_key, bucket)

    return object_key


def presigned_download_url(object_key: str, expires_in: int | None = None) -> DownloadLink:
    s3 = _get_s3_client()
    expires_in = expires_in or settings.presign_expires_in
    url = s3.generate_presigned_url(
        "get_object",
        Params={"Bucket": settings.s3_bucket, "Key": object_key},
        ExpiresIn=expires_in,
    )
    return DownloadLink(url=url, bucket=settings.s3_bucket, object_key=object_key, expires_in=expires_in)


def delete_object(object_key: str) -> None:
    s3 = _get_s3_client()
    s3.delete_object(Bucket=settings.s3_bucket, Key=object_key)
    logger.info("Removed %s from %s", object_key, settings.s3_bucket)

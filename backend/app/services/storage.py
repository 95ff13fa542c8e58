import logging
from typing import Any, Final

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import Settings

logger = logging.getLogger(__name__)

PRESIGN_TTL: Final[int] = 60


class StorageError(Exception):
    """Base class for object storage failures."""


class StorageConfigurationError(StorageError):
    """Raised when the S3 client cannot be constructed."""


class PresignError(StorageError):
    """Raised when a presigned URL cannot be produced."""


def _endpoint_url(endpoint: str, secure: bool) -> str:
    scheme = "https" if secure else "http"
    return f"{scheme}://{endpoint}"


class StorageService:
    """S3-compatible storage backend used to mint presigned upload URLs.

    The boto3 client is created once and shared across requests; it is never
    mutated after construction.
    """

    def __init__(self, settings: Settings, client: Any | None = None) -> None:
        self.settings = settings
        self.bucket = settings.minio_bucket
        self.public_base_url = settings.minio_public_url
        if client is not None:
            self.client = client
            return
        try:
            session = boto3.session.Session()
            self.client = session.client(
                "s3",
                endpoint_url=_endpoint_url(settings.minio_endpoint, settings.minio_use_ssl),
                aws_access_key_id=settings.minio_access_key,
                aws_secret_access_key=settings.minio_secret_key,
                region_name=settings.minio_region,
                config=Config(
                    signature_version="s3v4",
                    s3={"addressing_style": "path"},
                ),
            )
        except (BotoCoreError, ValueError) as exc:
            raise StorageConfigurationError(
                f"Cannot create S3 client for {settings.minio_endpoint}: {exc}"
            ) from exc

    def presign_put(self, key: str, expires_in: int = PRESIGN_TTL) -> str:
        # ContentType is left out of Params so it is not part of the signature.
        try:
            return self.client.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as exc:
            raise PresignError(f"Cannot presign PUT for {self.bucket}/{key}") from exc

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{self.bucket}/{key}"


def build_storage_service(settings: Settings) -> StorageService:
    service = StorageService(settings)
    logger.info(
        "Storage client ready: endpoint=%s bucket=%s secure=%s",
        settings.minio_endpoint,
        service.bucket,
        settings.minio_use_ssl,
    )
    return service

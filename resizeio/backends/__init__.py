"""
Storage backends and the factory that builds them from settings
"""
from typing import Optional

from resizeio import s3utils, schemas
from resizeio.settings import Settings

from .base import Backend
from .local import LocalBackend
from .s3 import MinioBackend, S3Backend, S3CompatibleBackend

clientCache = s3utils.Boto3ClientCache()


def _node(settings: Settings) -> schemas.StorageNode:
    return schemas.StorageNode(
        api_url=settings.s3_endpoint_url,
        region_name=settings.s3_region_name,
        access_key_id=settings.s3_access_key_id,
        secret_access_key=settings.s3_secret_access_key,
    )


def build_primary(settings: Settings) -> Backend:
    if settings.backend == "local":
        return LocalBackend(settings.local_root, settings.local_base_url)
    elif settings.backend == "s3":
        return S3Backend(
            clientCache.get_client(_node(settings)),
            settings.s3_bucket,
            prefix=settings.s3_prefix,
            custom_domain=settings.s3_custom_domain,
        )
    elif settings.backend == "minio":
        return MinioBackend(
            clientCache.get_minio_sdk_client(_node(settings)),
            settings.s3_bucket,
            settings.s3_endpoint_url,
            prefix=settings.s3_prefix,
            custom_domain=settings.s3_custom_domain,
        )
    raise ValueError(f"Unknown backend {settings.backend}")


def build_staging(settings: Settings) -> Optional[Backend]:
    if not settings.staging_root:
        return None
    return LocalBackend(settings.staging_root, settings.local_base_url)


__all__ = [
    "Backend",
    "LocalBackend",
    "MinioBackend",
    "S3Backend",
    "S3CompatibleBackend",
    "build_primary",
    "build_staging",
]

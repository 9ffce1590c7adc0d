"""
Helper functions for working with S3
"""
import hashlib
import urllib.parse
from typing import Any, Dict

import boto3
import minio
from botocore.client import Config

from . import schemas


class Boto3ClientCache:
    """
    A deployment may point the primary backend and other tooling at the same
    node.  Once a client has been established, cache it for future use.
    """

    def __init__(self):
        self.cache: Dict[str, Any] = {}

    @staticmethod
    def _get_primary_key(client_type: str, node: schemas.StorageNode) -> str:
        if not client_type in ["s3", "minio"]:
            raise ValueError(f"{client_type} unsupported by cache")
        primary_key = (
            (
                f"{client_type}{node.region_name}{node.api_url}"
                f"{node.access_key_id}{node.secret_access_key}"
            )
            .lower()
            .encode("utf-8")
        )
        return hashlib.sha256(primary_key).hexdigest()

    def get_client(self, node: schemas.StorageNode):
        primary_key_short_sha256 = Boto3ClientCache._get_primary_key("s3", node)
        client = self.cache.get(primary_key_short_sha256, None)
        if client is None:
            client = boto3.client(
                "s3",
                region_name=node.region_name,
                endpoint_url=node.api_url,
                aws_access_key_id=node.access_key_id,
                aws_secret_access_key=node.secret_access_key,
                config=Config(signature_version="s3v4"),
            )
            self.cache[primary_key_short_sha256] = client
        return client

    def get_minio_sdk_client(self, node: schemas.StorageNode) -> minio.Minio:
        if node.api_url is None:
            raise ValueError("minio nodes need an api_url")
        primary_key_short_sha256 = Boto3ClientCache._get_primary_key("minio", node)
        client = self.cache.get(primary_key_short_sha256, None)
        url = urllib.parse.urlparse(node.api_url)
        if client is None:
            client = minio.Minio(
                url.netloc,
                access_key=node.access_key_id,
                secret_key=node.secret_access_key,
                region=node.region_name,
                secure=url.scheme == "https",
            )
            self.cache[primary_key_short_sha256] = client
        return client


def object_key(prefix: str, path: str) -> str:
    """Full object key for a storage path under an optional key prefix"""
    return (prefix + path).lstrip("/")


def endpoint_parts(endpoint_url: str):
    """(scheme, host) of an endpoint url"""
    parsed = urllib.parse.urlparse(endpoint_url)
    return parsed.scheme or "https", parsed.netloc

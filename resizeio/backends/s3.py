import io
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError
from minio.error import S3Error
from urllib3.exceptions import HTTPError

from resizeio import s3utils, schemas
from resizeio.exceptions import BackendError

from .base import Backend

MISSING_CODES = {"404", "NoSuchKey", "NotFound", "NoSuchObject"}

# transport failures never reach a ClientError or S3Error
BOTO_ERRORS = (ClientError, BotoCoreError)
MINIO_ERRORS = (S3Error, HTTPError)


class S3CompatibleBackend(Backend):
    """
    Common attributes for object stores that speak S3.
    The URL resolver builds public URLs from these.
    """

    kind = schemas.BackendKind.S3

    def __init__(
        self,
        bucket: str,
        endpoint_url: Optional[str],
        prefix: str = "",
        custom_domain: Optional[str] = None,
    ):
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.prefix = prefix
        self.custom_domain = custom_domain

    def key(self, path: str) -> str:
        return s3utils.object_key(self.prefix, path)

    def exists(self, path: str) -> bool:
        return self.get_metadata(path).found


class S3Backend(S3CompatibleBackend):
    """Amazon S3 (or anything boto3 can talk to)"""

    def __init__(
        self,
        client,
        bucket: str,
        prefix: str = "",
        custom_domain: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ):
        super().__init__(
            bucket,
            endpoint_url or client.meta.endpoint_url,
            prefix=prefix,
            custom_domain=custom_domain,
        )
        self.client = client

    def _head(self, path: str) -> Optional[dict]:
        try:
            return self.client.head_object(Bucket=self.bucket, Key=self.key(path))
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            if str(error_code) in MISSING_CODES:
                return None
            raise BackendError(path, e)
        except BotoCoreError as e:
            raise BackendError(path, e)

    def get_metadata(self, path: str) -> schemas.Metadata:
        head = self._head(path)
        if head is None:
            return schemas.NOT_FOUND
        return schemas.found(
            type="file",
            path=path,
            timestamp=int(head["LastModified"].timestamp()),
            size=head.get("ContentLength"),
            mimetype=head.get("ContentType"),
        )

    def get(self, path: str) -> bytes:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=self.key(path))
            return response["Body"].read()
        except BOTO_ERRORS as e:
            raise BackendError(path, e)

    def content_type(self, path: str) -> str:
        head = self._head(path)
        if head is None:
            raise BackendError(path, FileNotFoundError(path))
        return head.get("ContentType") or "application/octet-stream"

    def put(self, path: str, data: bytes, options: schemas.UploadOptions):
        acl = "public-read"
        if options.visibility is schemas.Visibility.PRIVATE:
            acl = "private"
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=self.key(path),
                Body=data,
                ACL=acl,
                Expires=options.expires,
                CacheControl=options.cache_control,
                ContentType=options.content_type,
                ContentDisposition=options.content_disposition,
            )
        except BOTO_ERRORS as e:
            raise BackendError(path, e)


class MinioBackend(S3CompatibleBackend):
    """S3-compatible stores through the MinIO SDK"""

    def __init__(
        self,
        client,
        bucket: str,
        endpoint_url: str,
        prefix: str = "",
        custom_domain: Optional[str] = None,
    ):
        super().__init__(
            bucket, endpoint_url, prefix=prefix, custom_domain=custom_domain
        )
        self.client = client

    def _stat(self, path: str):
        try:
            return self.client.stat_object(self.bucket, self.key(path))
        except S3Error as e:
            if e.code in MISSING_CODES:
                return None
            raise BackendError(path, e)
        except HTTPError as e:
            raise BackendError(path, e)

    def get_metadata(self, path: str) -> schemas.Metadata:
        obj = self._stat(path)
        if obj is None:
            return schemas.NOT_FOUND
        return schemas.found(
            type="file",
            path=path,
            timestamp=int(obj.last_modified.timestamp()),
            size=obj.size,
            mimetype=obj.content_type,
        )

    def get(self, path: str) -> bytes:
        response = None
        try:
            response = self.client.get_object(self.bucket, self.key(path))
            return response.read()
        except MINIO_ERRORS as e:
            raise BackendError(path, e)
        finally:
            if response is not None:
                response.close()
                response.release_conn()

    def content_type(self, path: str) -> str:
        obj = self._stat(path)
        if obj is None:
            raise BackendError(path, FileNotFoundError(path))
        return obj.content_type or "application/octet-stream"

    def put(self, path: str, data: bytes, options: schemas.UploadOptions):
        # the SDK turns non-standard keys such as Expires into x-amz-meta-*,
        # so the lifetime travels in Cache-Control max-age only
        headers = {
            "Cache-Control": options.cache_control,
            "Content-Disposition": options.content_disposition,
        }
        if options.visibility is schemas.Visibility.PUBLIC:
            headers["x-amz-acl"] = "public-read"
        try:
            self.client.put_object(
                self.bucket,
                self.key(path),
                io.BytesIO(data),
                len(data),
                content_type=options.content_type,
                metadata=headers,
            )
        except MINIO_ERRORS as e:
            raise BackendError(path, e)

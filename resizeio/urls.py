"""
Public URLs for stored paths
"""
import logging
from typing import Optional

from . import s3utils, schemas
from .backends.base import Backend
from .utils import join_url, secure

logger = logging.getLogger("resizeio")


def _s3_url(backend, path: str) -> str:
    key = "/" + s3utils.object_key(backend.prefix, path)
    if backend.custom_domain:
        return backend.custom_domain.rstrip("/") + key
    scheme, host = s3utils.endpoint_parts(backend.endpoint_url)
    return f"{scheme}://{backend.bucket}.{host}{key}"


def _local_url(backend, path: str) -> str:
    return join_url(backend.base_url, path)


class BackendURLResolver:
    def url_for(
        self,
        backend: Backend,
        path: str,
        context: Optional[schemas.RequestContext] = None,
    ) -> str:
        url = backend.url_for(path)
        if url is None:
            if backend.kind is schemas.BackendKind.S3:
                url = _s3_url(backend, path)
            elif backend.kind is schemas.BackendKind.LOCAL:
                url = _local_url(backend, path)
            else:
                logger.warning("no way to build a url for %s on %r", path, backend)
                url = ""
        if context is not None and context.secure:
            url = secure(url)
        return url

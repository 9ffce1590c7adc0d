import logging
import posixpath
from typing import Optional

from . import schemas
from .backends.base import Backend
from .cache import MetadataCache

logger = logging.getLogger("resizeio")


class SourceResolver:
    """
    Find a source on the primary backend.  Sources missing there are promoted
    from the staging backend when it has them.
    """

    def __init__(
        self,
        primary: Backend,
        cache: MetadataCache,
        browser_cache: int,
        staging: Optional[Backend] = None,
    ):
        self.primary = primary
        self.staging = staging
        self.cache = cache
        self.browser_cache = browser_cache

    def promote(self, path: str):
        data = self.staging.get(path)
        content_type = self.staging.content_type(path)
        options = schemas.make_upload_options(
            posixpath.basename(path), content_type, self.browser_cache
        )
        self.primary.put(path, data, options)
        logger.info("promoted %s from staging", path)

    def resolve(self, path: str) -> bool:
        if self.cache.get(path) is not None:
            return True
        metadata, _ = self.cache.fetch(self.primary, path)
        if metadata.found:
            return True
        if self.staging is None or self.staging is self.primary:
            return False
        if not self.staging.exists(path):
            return False
        self.promote(path)
        return True

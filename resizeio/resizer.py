"""
End-to-end derivative resolution.  `url_for` and `storage_path_for` are the
public entry points; everything else is plumbing.
"""
import logging
from typing import Mapping, Optional

from . import backends, paths, schemas
from .backends.base import Backend
from .cache import MetadataCache
from .exceptions import (
    BackendError,
    MetadataUnavailable,
    ResizeError,
    SourceUnavailable,
)
from .extensions import MIME_EXTENSIONS
from .generator import DerivativeGenerator
from .leases import LeaseRegistry
from .placeholders import PlaceholderResolver
from .settings import Settings, settings as default_settings
from .sources import SourceResolver
from .urls import BackendURLResolver

logger = logging.getLogger("resizeio")


class Resizer:
    def __init__(
        self,
        primary: Backend,
        settings: Settings,
        staging: Optional[Backend] = None,
        cache: Optional[MetadataCache] = None,
        extensions: Mapping[str, str] = MIME_EXTENSIONS,
    ):
        self.primary = primary
        self.settings = settings
        self.cache = cache or MetadataCache(settings.cache_expiry)
        self.urls = BackendURLResolver()
        self.sources = SourceResolver(
            primary, self.cache, settings.browser_cache, staging=staging
        )
        self.generator = DerivativeGenerator(
            primary, settings.browser_cache, extensions=extensions
        )
        self.placeholders = PlaceholderResolver(
            primary,
            self.urls,
            settings.public_name,
            settings.video_placeholder,
            settings.file_placeholder,
            video_extensions=settings.video_extensions,
        )
        self.raster_extensions = {e.lower() for e in settings.raster_extensions}
        self.leases = LeaseRegistry()

    def _is_fresh(self, target_ts: Optional[int], source_ts: int) -> bool:
        # ties go to the existing derivative
        return target_ts is not None and target_ts >= source_ts

    def _refresh(
        self,
        path: str,
        spec: schemas.TransformSpec,
        provisional: str,
        target_ts: Optional[int],
    ) -> str:
        source_ts = self.cache.timestamp(self.primary, path)
        if source_ts is None:
            raise MetadataUnavailable(f"No timestamp for {path}")
        if self._is_fresh(target_ts, source_ts):
            return provisional

        with self.leases.hold(provisional):
            # someone else may have produced it while we waited
            target_ts = self.cache.timestamp(self.primary, provisional, refresh=True)
            source_ts = self.cache.timestamp(self.primary, path, refresh=True)
            if source_ts is None:
                raise MetadataUnavailable(f"No timestamp for {path}")
            if self._is_fresh(target_ts, source_ts):
                return provisional
            logger.debug("regenerating %s (%s < %s)", provisional, target_ts, source_ts)
            generated = self.generator.generate(path, spec, provisional)
            self.cache.forget(generated.path)
            return generated.path

    def resolve(
        self,
        path: Optional[str],
        width: Optional[int] = None,
        height: Optional[int] = None,
        action: str = schemas.Action.FIT.value,
        as_url: bool = True,
        context: Optional[schemas.RequestContext] = None,
    ) -> str:
        """
        URL (or storage path, when `as_url` is false) of the derivative of
        `path`, generating it first when missing or older than the source.

        Never raises: an empty string means no derivative is available.
        """
        spec = schemas.TransformSpec(action=action, width=width, height=height)
        if not path or not spec.is_valid:
            return ""
        provisional = paths.derive(
            self.settings.dir, path, spec.action, spec.width, spec.height
        )
        try:
            target_ts = self.cache.timestamp(self.primary, provisional)
            if target_ts is None and not self.sources.resolve(path):
                raise SourceUnavailable(f"{path} not found on any backend")

            extension = paths.extension(path).lower()
            if extension not in self.raster_extensions:
                return self.placeholders.placeholder_for(extension, path, context)

            target = self._refresh(path, spec, provisional, target_ts)
        except (ResizeError, BackendError) as e:
            logger.warning("no derivative for %s: %s", path, e)
            return ""

        if as_url:
            return self.urls.url_for(self.primary, target, context)
        return target


_resizer: Optional[Resizer] = None


def default_resizer() -> Resizer:
    global _resizer
    if _resizer is None:
        _resizer = Resizer(
            backends.build_primary(default_settings),
            default_settings,
            staging=backends.build_staging(default_settings),
        )
    return _resizer


def url_for(
    path: Optional[str],
    width: Optional[int] = None,
    height: Optional[int] = None,
    action: str = "fit",
    context: Optional[schemas.RequestContext] = None,
) -> str:
    return default_resizer().resolve(path, width, height, action, context=context)


def storage_path_for(
    path: Optional[str],
    width: Optional[int] = None,
    height: Optional[int] = None,
    action: str = "fit",
) -> str:
    return default_resizer().resolve(path, width, height, action, as_url=False)

from typing import Iterable, Optional

from . import schemas
from .backends.base import Backend
from .urls import BackendURLResolver
from .utils import join_url, secure


class PlaceholderResolver:
    """Stand-in URLs for sources that can't be rasterized"""

    def __init__(
        self,
        backend: Backend,
        urls: BackendURLResolver,
        asset_base_url: str,
        video_placeholder: str,
        file_placeholder: str,
        video_extensions: Iterable[str] = ("mp4", "webm"),
    ):
        self.backend = backend
        self.urls = urls
        self.asset_base_url = asset_base_url
        self.video_placeholder = video_placeholder
        self.file_placeholder = file_placeholder
        self.video_extensions = set(video_extensions)

    def _asset(self, asset: str, context: Optional[schemas.RequestContext]) -> str:
        url = join_url(self.asset_base_url, asset)
        if context is not None and context.secure:
            url = secure(url)
        return url

    def placeholder_for(
        self,
        extension: str,
        original_path: str,
        context: Optional[schemas.RequestContext] = None,
    ) -> str:
        if extension in self.video_extensions:
            return self._asset(self.video_placeholder, context)
        elif extension == "svg":
            # vectors are served untouched
            return self.urls.url_for(self.backend, original_path, context)
        return self._asset(self.file_placeholder, context)

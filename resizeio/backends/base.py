import abc
from typing import Optional

from resizeio import schemas


class Backend(abc.ABC):
    """
    The narrow capability interface the pipeline uses to talk to storage.

    `kind` is only consulted when building public URLs.
    """

    kind: schemas.BackendKind = schemas.BackendKind.OTHER

    @abc.abstractmethod
    def get_metadata(self, path: str) -> schemas.Metadata:
        ...

    @abc.abstractmethod
    def exists(self, path: str) -> bool:
        ...

    @abc.abstractmethod
    def get(self, path: str) -> bytes:
        ...

    @abc.abstractmethod
    def content_type(self, path: str) -> str:
        ...

    @abc.abstractmethod
    def put(self, path: str, data: bytes, options: schemas.UploadOptions):
        ...

    def url_for(self, path: str) -> Optional[str]:
        """Direct URL construction, for backends that know their own public address"""
        return None

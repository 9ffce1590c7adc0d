import mimetypes
import os
import stat

import filetype

from resizeio import schemas
from resizeio.exceptions import BackendError, InvalidInput

from .base import Backend

PUBLIC_FILE_MODE = 0o644
PRIVATE_FILE_MODE = 0o600


class LocalBackend(Backend):
    """Files under a root directory, served from `base_url`"""

    kind = schemas.BackendKind.LOCAL

    def __init__(self, root: str, base_url: str = ""):
        self.root = os.path.abspath(root)
        self.base_url = base_url

    def _full_path(self, path: str) -> str:
        full = os.path.abspath(os.path.join(self.root, path.lstrip("/")))
        if os.path.commonpath([self.root, full]) != self.root:
            raise InvalidInput(f"{path} escapes the storage root")
        return full

    def get_metadata(self, path: str) -> schemas.Metadata:
        try:
            st = os.stat(self._full_path(path))
        except FileNotFoundError:
            return schemas.NOT_FOUND
        except OSError as e:
            raise BackendError(path, e)
        if not stat.S_ISREG(st.st_mode):
            return schemas.NOT_FOUND
        return schemas.found(
            type="file",
            path=path,
            timestamp=int(st.st_mtime),
            size=st.st_size,
        )

    def exists(self, path: str) -> bool:
        return os.path.isfile(self._full_path(path))

    def get(self, path: str) -> bytes:
        try:
            with open(self._full_path(path), "rb") as f:
                return f.read()
        except OSError as e:
            raise BackendError(path, e)

    def content_type(self, path: str) -> str:
        kind = filetype.guess(self._full_path(path))
        if kind is not None:
            return kind.mime
        guessed, _ = mimetypes.guess_type(path)
        return guessed or "application/octet-stream"

    def put(self, path: str, data: bytes, options: schemas.UploadOptions):
        # HTTP headers in `options` are the web server's business for local files
        full = self._full_path(path)
        try:
            os.makedirs(os.path.dirname(full), exist_ok=True)
            with open(full, "wb") as f:
                f.write(data)
            if options.visibility is schemas.Visibility.PUBLIC:
                os.chmod(full, PUBLIC_FILE_MODE)
            else:
                os.chmod(full, PRIVATE_FILE_MODE)
        except OSError as e:
            raise BackendError(path, e)

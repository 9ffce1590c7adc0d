import io
import os
from typing import Dict, List, Optional, Tuple

import pytest
from PIL import Image

from resizeio import schemas
from resizeio.backends import LocalBackend
from resizeio.backends.base import Backend
from resizeio.cache import MetadataCache
from resizeio.resizer import Resizer
from resizeio.settings import Settings


def make_image(fmt: str = "JPEG", size=(400, 300), color="red") -> bytes:
    mode = "RGBA" if fmt == "PNG" else "RGB"
    out = io.BytesIO()
    Image.new(mode, size, color).save(out, format=fmt)
    return out.getvalue()


def write_file(root: str, path: str, data: bytes, mtime: Optional[int] = None) -> str:
    full = os.path.join(root, path)
    os.makedirs(os.path.dirname(full), exist_ok=True)
    with open(full, "wb") as f:
        f.write(data)
    if mtime is not None:
        os.utime(full, (mtime, mtime))
    return full


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class MemoryBackend(Backend):
    """Dict-backed store that records every call"""

    def __init__(self, now: int = 1000):
        self.now = now
        self.objects: Dict[str, dict] = {}
        self.calls: List[Tuple[str, str]] = []

    def add(self, path: str, data: bytes, content_type="image/jpeg", **fields):
        self.objects[path] = {
            "data": data,
            "content_type": content_type,
            "fields": fields or {"timestamp": self.now},
            "options": None,
        }

    def get_metadata(self, path: str) -> schemas.Metadata:
        self.calls.append(("get_metadata", path))
        obj = self.objects.get(path)
        if obj is None:
            return schemas.NOT_FOUND
        return schemas.found(**obj["fields"])

    def exists(self, path: str) -> bool:
        self.calls.append(("exists", path))
        return path in self.objects

    def get(self, path: str) -> bytes:
        self.calls.append(("get", path))
        return self.objects[path]["data"]

    def content_type(self, path: str) -> str:
        self.calls.append(("content_type", path))
        return self.objects[path]["content_type"]

    def put(self, path: str, data: bytes, options: schemas.UploadOptions):
        self.calls.append(("put", path))
        self.objects[path] = {
            "data": data,
            "content_type": options.content_type,
            "fields": {"timestamp": self.now},
            "options": options,
        }

    def url_for(self, path: str) -> Optional[str]:
        return f"http://memory.test/{path}"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        public_name="http://app.test",
        dir="resized/",
        cache_expiry=3600,
        browser_cache=600,
        local_base_url="http://cdn.test/storage",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(100.0)


@pytest.fixture
def primary_root(tmp_path) -> str:
    root = tmp_path / "primary"
    root.mkdir()
    return str(root)


@pytest.fixture
def staging_root(tmp_path) -> str:
    root = tmp_path / "staging"
    root.mkdir()
    return str(root)


@pytest.fixture
def primary(primary_root, test_settings) -> LocalBackend:
    return LocalBackend(primary_root, test_settings.local_base_url)


@pytest.fixture
def resizer(primary, test_settings, clock) -> Resizer:
    return Resizer(
        primary,
        test_settings,
        cache=MetadataCache(test_settings.cache_expiry, clock=clock),
    )

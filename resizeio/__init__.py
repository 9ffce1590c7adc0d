"""
Derivatives are resized copies of images managed in a storage backend.
They're generated lazily on first request and reused until the source
changes underneath them.
"""
from .resizer import Resizer, storage_path_for, url_for

__all__ = ["Resizer", "storage_path_for", "url_for"]

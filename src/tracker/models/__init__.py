from .base import Base
from .stored_blob import StoredBlob

__all__ = [
    "Base",
    "StoredBlob",
]

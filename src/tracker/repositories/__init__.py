from .blob_repository import BlobRepository

__all__ = [
    "BlobRepository",
]

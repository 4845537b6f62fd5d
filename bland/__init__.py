"""
Bland Document Store.

Provides a file-backed JSON configuration store addressed with dot paths,
with optional AES-GCM encryption or zlib compression of the stored file.
"""

from bland.errors import (
    BlandError,
    ConfigDirNotFound,
    DecryptionError,
    EncodingError,
    EncryptionError,
    InvalidKeyLength,
    InvalidPathError,
    NotFound,
    PathTraversalError,
    SerializationError,
    StoreIOError,
)
from bland.store import Store

__all__ = [
    "Store",
    "BlandError",
    "ConfigDirNotFound",
    "DecryptionError",
    "EncodingError",
    "EncryptionError",
    "InvalidKeyLength",
    "InvalidPathError",
    "NotFound",
    "PathTraversalError",
    "SerializationError",
    "StoreIOError",
]

"""Byte transforms applied to the store document before write and after read.

Exactly one transform is active for a store, chosen from its configuration
each time the file is touched:

* :class:`EncryptedTransform` when an encryption key is set. It always wins,
  so a store with both a key and the compression flag is encrypted only.
* :class:`CompressedTransform` when compression is enabled.
* :class:`PlainTransform` otherwise.

No header marks which transform produced a file; the reader must be
configured the same way as the writer.
"""

import logging
import os
import zlib
from typing import Optional, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from bland.errors import (
    DecryptionError,
    EncodingError,
    EncryptionError,
    InvalidKeyLength,
    StoreIOError,
)

logger = logging.getLogger(__name__)

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16


def pad_key(key: Union[str, bytes]) -> bytes:
    """Turn a user supplied key into a 32-byte AES key.

    The key is zero-padded on the right; it is not stretched or hashed.

    Args:
        key: Key text (UTF-8 encoded) or raw bytes, at most 32 bytes long.

    Returns:
        Exactly 32 bytes.

    Raises:
        InvalidKeyLength: If the encoded key is longer than 32 bytes.
    """
    raw = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    if len(raw) > KEY_SIZE:
        raise InvalidKeyLength(len(raw))
    buffer = bytearray(KEY_SIZE)
    buffer[: len(raw)] = raw
    return bytes(buffer)


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.warning("Store payload is not valid UTF-8")
        raise EncodingError(str(exc)) from exc


class PlainTransform:
    """Store the document as UTF-8 text."""

    name = "plain"

    def wrap(self, text: str) -> bytes:
        return text.encode("utf-8")

    def unwrap(self, data: bytes) -> str:
        return _decode(data)

    def __repr__(self) -> str:
        return "PlainTransform()"


class CompressedTransform:
    """Store the document as a zlib (DEFLATE) stream."""

    name = "compressed"

    def __init__(self, level: int = zlib.Z_DEFAULT_COMPRESSION):
        self.level = level

    def wrap(self, text: str) -> bytes:
        return zlib.compress(text.encode("utf-8"), self.level)

    def unwrap(self, data: bytes) -> str:
        try:
            raw = zlib.decompress(data)
        except zlib.error as exc:
            logger.warning("Store payload is not a valid compressed stream")
            raise StoreIOError(f"Invalid compressed data: {exc}") from exc
        return _decode(raw)

    def __repr__(self) -> str:
        return f"CompressedTransform(level={self.level})"


class EncryptedTransform:
    """Store the document as ``nonce || AES-256-GCM ciphertext and tag``."""

    name = "encrypted"

    def __init__(self, key: bytes):
        if len(key) != KEY_SIZE:
            raise InvalidKeyLength(len(key))
        self._key = bytes(key)

    def wrap(self, text: str) -> bytes:
        nonce = os.urandom(NONCE_SIZE)
        try:
            sealed = AESGCM(self._key).encrypt(nonce, text.encode("utf-8"), None)
        except (OverflowError, ValueError) as exc:
            raise EncryptionError(f"Encryption error: {exc}") from exc
        return nonce + sealed

    def unwrap(self, data: bytes) -> str:
        if len(data) < NONCE_SIZE + TAG_SIZE:
            logger.warning("Encrypted store payload is truncated (%d bytes)", len(data))
            raise DecryptionError("Decryption error: payload too short")
        nonce, sealed = data[:NONCE_SIZE], data[NONCE_SIZE:]
        try:
            raw = AESGCM(self._key).decrypt(nonce, sealed, None)
        except InvalidTag as exc:
            logger.warning("Encrypted store payload failed authentication")
            raise DecryptionError("Decryption error") from exc
        return _decode(raw)

    def __repr__(self) -> str:
        return "EncryptedTransform(key=<redacted>)"


Transform = Union[PlainTransform, CompressedTransform, EncryptedTransform]


def resolve_transform(key: Optional[bytes] = None, compress: bool = False) -> Transform:
    """Pick the transform for a store configuration.

    Args:
        key: Padded 32-byte encryption key, or None.
        compress: Whether compression is enabled.

    Returns:
        The active transform; encryption takes precedence over compression.
    """
    if key is not None:
        return EncryptedTransform(key)
    if compress:
        return CompressedTransform()
    return PlainTransform()

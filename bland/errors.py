"""Exceptions raised by the document store."""


class BlandError(Exception):
    """Base class for every store error."""


class NotFound(BlandError, LookupError):
    """The store file does not exist."""

    def __init__(self, path=None):
        self.path = path
        message = "Store not found"
        if path is not None:
            message = f"Store not found: {path}"
        super().__init__(message)


class InvalidPathError(BlandError, ValueError):
    """A dot path is empty or contains an empty segment."""


class PathTraversalError(BlandError):
    """A leaf value was reached where a container was required."""

    def __init__(self, path: str = "", segment: str = ""):
        self.path = path
        self.segment = segment
        super().__init__("Unexpected value reached while traversing path")


class SerializationError(BlandError, ValueError):
    """A value could not be converted to JSON, or stored bytes are not JSON."""


class EncodingError(BlandError, ValueError):
    """Decoded store bytes are not valid UTF-8."""


class InvalidKeyLength(BlandError, ValueError):
    """The encryption key is longer than 32 bytes."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(
            f"Invalid encryption key length: {length} bytes (maximum is 32)"
        )


class EncryptionError(BlandError):
    """The store payload could not be encrypted."""


class DecryptionError(BlandError):
    """The store payload could not be decrypted or failed authentication."""


class StoreIOError(BlandError, OSError):
    """A filesystem operation or the compressed stream failed."""


class ConfigDirNotFound(BlandError):
    """The platform configuration directory could not be determined."""

    def __init__(self):
        super().__init__("Config directory not found")

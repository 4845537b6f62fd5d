"""File-backed JSON document store addressed with dot paths."""

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Optional, Union

from bland import dotpath
from bland.dirs import config_dir
from bland.errors import NotFound, SerializationError, StoreIOError
from bland.transforms import Transform, pad_key, resolve_transform
from config.settings import DEFAULT_BASE_NAME, DEFAULT_EXTENSION, DEFAULT_SUFFIX

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT: dict = {}


class Store:
    """A JSON document persisted at ``<root>/<namespace>-<suffix>/<base>.<ext>``.

    Every operation reads the whole file from disk and mutating operations
    rewrite it in full. There is no locking and no in-memory cache, so the
    location is recomputed from the current attributes on each call.

    Example::

        store = Store("my-app", root="/tmp/cfg")
        store.set("a.b", 42)        # writes /tmp/cfg/my-app-rs/config.json
        store.get("a.b")            # 42
        store.delete("a")           # {"b": 42}
    """

    def __init__(
        self,
        namespace: str,
        root: Optional[Union[str, Path]] = None,
        *,
        suffix: str = DEFAULT_SUFFIX,
        base_name: str = DEFAULT_BASE_NAME,
        extension: str = DEFAULT_EXTENSION,
        pretty: bool = False,
        compress: bool = False,
        encryption_key: Optional[Union[str, bytes]] = None,
    ):
        """Initialize the store configuration. No files are touched.

        Args:
            namespace: Application or project name; names the store folder.
            root: Directory holding the store folder. Defaults to the
                platform configuration directory.
            suffix: Appended to the namespace to form the folder name.
            base_name: File name of the document, without extension.
            extension: File extension of the document.
            pretty: Write indented JSON instead of compact JSON.
            compress: Compress the file (ignored when a key is set).
            encryption_key: Key of at most 32 bytes; enables encryption.

        Raises:
            ConfigDirNotFound: If ``root`` is omitted and no platform
                configuration directory exists.
            InvalidKeyLength: If ``encryption_key`` is longer than 32 bytes.
        """
        self.root = Path(root) if root is not None else config_dir()
        self.namespace = namespace
        self.suffix = suffix
        self.base_name = base_name
        self.extension = extension
        self.pretty = pretty
        self.compress = compress
        self._encryption_key: Optional[bytes] = None
        if encryption_key is not None:
            self.set_encryption_key(encryption_key)

    def __repr__(self) -> str:
        return f"Store(namespace={self.namespace!r}, path={str(self.store_path)!r})"

    # -- configuration ----------------------------------------------------

    @property
    def store_dir_path(self) -> Path:
        """Directory holding the store file."""
        return self.root / f"{self.namespace}-{self.suffix}"

    @property
    def store_path(self) -> Path:
        """Path of the store file."""
        return self.store_dir_path / f"{self.base_name}.{self.extension}"

    @property
    def encryption_key(self) -> Optional[bytes]:
        """The padded 32-byte key, or None when encryption is off."""
        return self._encryption_key

    def set_encryption_key(self, key: Union[str, bytes]) -> None:
        """Enable encryption with ``key``, zero-padded to 32 bytes.

        Raises:
            InvalidKeyLength: If the key is longer than 32 bytes. The
                previous key, if any, is kept.
        """
        self._encryption_key = pad_key(key)

    def clear_encryption_key(self) -> None:
        """Disable encryption for subsequent reads and writes."""
        self._encryption_key = None

    @property
    def transform(self) -> Transform:
        """The byte transform matching the current configuration."""
        return resolve_transform(self._encryption_key, self.compress)

    # -- existence --------------------------------------------------------

    def exists(self) -> bool:
        """Return True if the store file exists."""
        return self.store_path.exists()

    def directory_exists(self) -> bool:
        """Return True if the store directory exists."""
        return self.store_dir_path.exists()

    # -- lifecycle --------------------------------------------------------

    def create(self) -> None:
        """Create the store directory if needed and initialize the file."""
        if not self.directory_exists():
            logger.debug("Creating store directory %s", self.store_dir_path)
            try:
                self.store_dir_path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise StoreIOError(
                    f"Cannot create store directory {self.store_dir_path}: {exc}"
                ) from exc
        self.init()

    def init(self) -> None:
        """Write an empty document, replacing any previous content."""
        if not self.directory_exists():
            self.create()
            return
        logger.debug("Initializing store %s", self.store_path)
        self._write(dict(EMPTY_DOCUMENT))

    def clear(self) -> None:
        """Reset the document to ``{}``. Alias of :meth:`init`."""
        logger.info("Clearing store %s", self.store_path)
        self.init()

    def destroy(self) -> None:
        """Remove the store directory and everything in it."""
        logger.info("Destroying store directory %s", self.store_dir_path)
        try:
            shutil.rmtree(self.store_dir_path)
        except OSError as exc:
            raise StoreIOError(
                f"Cannot remove store directory {self.store_dir_path}: {exc}"
            ) from exc

    # -- document operations ----------------------------------------------

    def get(self, path: str) -> Any:
        """Return the value at ``path``, or None if nothing is stored there.

        Raises:
            NotFound: If the store file does not exist.
            InvalidPathError: If ``path`` is malformed.
        """
        segments = dotpath.parse(path)
        return dotpath.get(self._read(), segments)

    def has(self, path: str) -> bool:
        """Return True if a value (including ``null``) is stored at ``path``.

        Raises:
            NotFound: If the store file does not exist.
        """
        segments = dotpath.parse(path)
        return dotpath.has(self._read(), segments)

    def all(self) -> Any:
        """Return the whole document.

        Raises:
            NotFound: If the store file does not exist.
        """
        return self._read()

    def set(self, path: str, value: Any) -> None:
        """Store ``value`` at ``path``, creating the store file if needed.

        Intermediate objects are created as required.

        Raises:
            SerializationError: If ``value`` is not JSON serializable.
            PathTraversalError: If ``path`` runs through a non-container
                value. The file is left untouched.
        """
        segments = dotpath.parse(path)
        data = self._to_json_value(value)
        if not self.exists():
            self.create()
        document = self._read()
        dotpath.set(document, segments, data)
        self._write(document)

    def delete(self, path: str) -> Any:
        """Remove the value at ``path`` and return it (None if absent).

        Raises:
            NotFound: If the store file does not exist.
            PathTraversalError: If ``path`` runs through a non-container value.
        """
        segments = dotpath.parse(path)
        document = self._read()
        removed = dotpath.delete(document, segments)
        self._write(document)
        return removed

    # -- file access ------------------------------------------------------

    @staticmethod
    def _to_json_value(value: Any) -> Any:
        try:
            return json.loads(json.dumps(value, allow_nan=False))
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"Value is not JSON serializable: {exc}") from exc

    def _serialize(self, document: Any) -> str:
        if self.pretty:
            return json.dumps(document, indent=2, ensure_ascii=False)
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False)

    def _read(self) -> Any:
        """Load and decode the document from disk."""
        if not self.exists():
            raise NotFound(self.store_path)
        try:
            raw = self.store_path.read_bytes()
        except OSError as exc:
            raise StoreIOError(f"Cannot read store {self.store_path}: {exc}") from exc
        text = self.transform.unwrap(raw)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Store %s does not contain valid JSON", self.store_path)
            raise SerializationError(f"Invalid JSON in store: {exc}") from exc

    def _write(self, document: Any) -> None:
        """Encode and write the document, replacing the file content."""
        transform = self.transform
        payload = transform.wrap(self._serialize(document))
        logger.debug(
            "Writing %d bytes (%s) to %s", len(payload), transform.name, self.store_path
        )
        try:
            self.store_path.write_bytes(payload)
        except OSError as exc:
            raise StoreIOError(f"Cannot write store {self.store_path}: {exc}") from exc

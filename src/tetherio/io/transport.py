"""
Device-sync transport.

A transport is the connection to the tethered device. It moves whole files
and creates single directories, addressing them with device paths
(``\\sub\\file``) passed through unmodified by the backends.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional
import atexit
import errno
import logging
import posixpath
import threading
from pathlib import Path

import fsspec
from fsspec.implementations.memory import MemoryFileSystem
from typing_extensions import override

from .. import constants
from .decorators import wrap_io_error
from .path import device_to_posix
from ..exceptions import (
    DeviceNotConnectedError,
    OperationFailedError,
    PathNotFoundError,
)

logger = logging.getLogger(__name__)


# --------------------
#
# Abstract Transport
#
# --------------------

class Transport(ABC):
    """Device-sync connection"""

    name = "Transport"

    def open(self):
        """Establish the connection. Called once by SyncContext."""
        logger.debug(f"[{self.name}] Connected")

    def close(self):
        """Tear the connection down"""
        logger.debug(f"[{self.name}] Disconnected")

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Read a whole file from the device"""
        pass

    @abstractmethod
    def write(self, path: str, content: bytes):
        """Create or overwrite a file on the device"""
        pass

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """Check if a file exists on the device"""
        pass

    @abstractmethod
    def create_directory(self, path: str):
        """Create a single directory on the device, existing ones are left alone"""
        pass


# --------------------
#
# fsspec-backed Transport
#
# --------------------

class FsspecTransport(Transport, ABC):
    """Transport over an fsspec filesystem holding the device contents"""

    def __init__(self, fs_instance, name=None):
        self.fs = fs_instance
        self.name = name or f"{type(fs_instance).__name__}"

    @abstractmethod
    def path2str(self, path: str) -> str:
        """Convert a device path to a path of the underlying filesystem"""
        pass

    def _require_parent(self, path: str, target: str):
        parent = posixpath.dirname(target)
        root = self.path2str(constants.DEVICE_SEPARATOR)
        if parent and parent != root and not self.fs.isdir(parent):
            raise OperationFailedError(
                f"[{self.name}] Parent directory of '{path}' does not exist on device",
                path,
                code=errno.ENOENT,
            )

    @override
    @wrap_io_error
    def read(self, path: str) -> bytes:
        target = self.path2str(path)
        logger.debug(f"[{self.name}] Reading bytes from: {path}")
        if not self.fs.isfile(target):
            raise PathNotFoundError(f"[{self.name}] File '{path}' not found on device", path)
        with self.fs.open(target, "rb") as f:
            return f.read()

    @override
    @wrap_io_error
    def write(self, path: str, content: bytes):
        target = self.path2str(path)
        logger.debug(f"[{self.name}] Writing {len(content)} bytes to: {path}")
        self._require_parent(path, target)
        with self.fs.open(target, "wb") as f:
            f.write(content)

    @override
    def file_exists(self, path: str) -> bool:
        try:
            return self.fs.isfile(self.path2str(path))
        except Exception as e:
            logger.debug(f"[{self.name}] Could not check '{path}': {e}")
            return False

    @override
    @wrap_io_error
    def create_directory(self, path: str):
        target = self.path2str(path)
        if self.fs.isdir(target):
            logger.debug(f"[{self.name}] Directory '{path}' already exists")
            return
        if self.fs.isfile(target):
            raise OperationFailedError(
                f"[{self.name}] Cannot create directory '{path}': a file is in the way",
                path,
                code=errno.EEXIST,
            )
        self._require_parent(path, target)
        logger.debug(f"[{self.name}] Creating directory: {path}")
        self.fs.makedirs(target, exist_ok=True)


class MirrorTransport(FsspecTransport):
    """
    Device contents exposed under a local directory, e.g. the mount point of
    the device or a folder kept in sync with it.
    """

    def __init__(self, root: str):
        super().__init__(fsspec.filesystem("file"), name="MirrorTransport")
        self.root = Path(root).absolute().as_posix().rstrip("/")

    @override
    def open(self):
        if not self.fs.isdir(self.root or "/"):
            raise DeviceNotConnectedError(
                f"[{self.name}] Device root '{self.root}' is not available", self.root
            )
        super().open()

    @override
    def path2str(self, path: str) -> str:
        return self.root + device_to_posix(path)


class IsolatedMemoryFileSystem(MemoryFileSystem):
    """fsspec memory filesystem whose contents belong to this instance only"""

    cachable = False

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.store = {}
        self.pseudo_dirs = [""]


class MemoryTransport(FsspecTransport):
    """In-memory device, for dry runs and tests"""

    def __init__(self):
        super().__init__(IsolatedMemoryFileSystem(), name="MemoryTransport")

    @override
    def path2str(self, path: str) -> str:
        return device_to_posix(path)


def create_transport(
    kind: constants.TransportKind = constants.DEFAULT_TRANSPORT, root: Optional[str] = None
) -> Transport:
    """Create a transport of the given kind"""
    kind = constants.TransportKind(kind)
    if kind is constants.TransportKind.MIRROR:
        if not root:
            raise DeviceNotConnectedError("Mirror transport requires a device root directory")
        return MirrorTransport(root)
    return MemoryTransport()


# --------------------
#
# Connection management
#
# --------------------

class SyncContext:
    """
    Owns the device-sync connection.

    The connection is established lazily on the first ``connect()`` and
    reused by every later call until ``disconnect()``.
    """

    def __init__(self, factory: Callable[[], Transport] = MemoryTransport):
        self._factory = factory
        self._connection: Optional[Transport] = None
        self._lock = threading.Lock()

    @property
    def connected(self) -> bool:
        return self._connection is not None

    def connect(self) -> Transport:
        with self._lock:
            if self._connection is None:
                connection = self._factory()
                connection.open()
                self._connection = connection
                logger.debug(f"Device-sync connection established via {connection.name}")
            return self._connection

    def disconnect(self):
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None


_default_context: Optional[SyncContext] = None
_default_lock = threading.Lock()


def get_default_context() -> SyncContext:
    """Return the process-wide context, creating an in-memory one if none was set."""
    global _default_context
    with _default_lock:
        if _default_context is None:
            _default_context = SyncContext()
        return _default_context


def set_default_context(context: Optional[SyncContext]):
    """Replace the process-wide context, disconnecting the previous one."""
    global _default_context
    with _default_lock:
        previous, _default_context = _default_context, context
    if previous is not None and previous is not context:
        previous.disconnect()


@atexit.register
def _teardown():
    if _default_context is not None:
        _default_context.disconnect()

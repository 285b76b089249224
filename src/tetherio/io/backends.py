from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, Optional
import logging
import os
import threading

import fsspec
from typing_extensions import override

from .decorators import wrap_io_error
from .path import PathKind, PathLike, as_stream_path, split_file_path
from .transport import SyncContext, Transport, get_default_context
from ..exceptions import (
    StreamIOError,
    OperationFailedError,
    PathNotFoundError,
    UnknownBackendError,
)

logger = logging.getLogger(__name__)

# The working directory is process-wide: it is switched, and relative paths are
# resolved against it, under this lock only
_cwd_lock = threading.RLock()


@contextmanager
def working_directory(path: str) -> Iterator[str]:
    """
    Temporarily switch the process working directory.

    The previous directory is restored on exit, whether or not the body raised.
    """
    with _cwd_lock:
        previous = os.getcwd()
        os.chdir(path)
        try:
            yield previous
        finally:
            os.chdir(previous)


# --------------------------------------------------------
#
# Abstract Base Backend Interface
#
# --------------------------------------------------------

class Backend(ABC):
    """Storage backend for one kind of path"""

    @abstractmethod
    def read_bytes(self, path: PathLike) -> bytes:
        """Read a whole file"""
        pass

    @abstractmethod
    def write_bytes(self, path: PathLike, content: bytes):
        """Create or overwrite a file"""
        pass

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Check if a file exists, never raises"""
        pass

    @abstractmethod
    def mkdir(self, path: PathLike):
        """Create a single directory, succeeding if it already exists"""
        pass


# --------------------
#
# Local Backend
#
# --------------------

class LocalBackend(Backend):
    """Local disk and UNC network paths"""

    def __init__(self):
        self.fs = fsspec.filesystem("file")
        self.name = "LocalBackend"

    @staticmethod
    def _read_file(name: str) -> bytes:
        with open(name, "rb") as f:
            return f.read()

    @override
    def read_bytes(self, path: PathLike) -> bytes:
        path = str(path)
        directory, name = split_file_path(path)
        logger.debug(f"[{self.name}] Reading bytes from: {path}")
        try:
            with _cwd_lock:
                if not directory:
                    return self._read_file(name)
                # relative components resolve against the file's own folder
                with working_directory(directory):
                    return self._read_file(name)
        except OSError as e:
            raise PathNotFoundError(
                f"Couldn't open file '{path}' for reading: {e.strerror or e}", path
            ) from e

    @override
    def write_bytes(self, path: PathLike, content: bytes):
        path = str(path)
        logger.debug(f"[{self.name}] Writing {len(content)} bytes to: {path}")
        try:
            with _cwd_lock, self.fs.open(path, "wb") as f:
                f.write(content)
        except OSError as e:
            raise OperationFailedError(
                f"Couldn't write file '{path}' ({e.errno}): {e.strerror or e}", path, code=e.errno
            ) from e

    @override
    def exists(self, path: PathLike) -> bool:
        try:
            with _cwd_lock, open(str(path), "rb"):
                return True
        except (OSError, ValueError):
            return False

    @override
    def mkdir(self, path: PathLike):
        path = str(path)
        with _cwd_lock:
            try:
                self.fs.mkdir(path, create_parents=False)
                logger.debug(f"[{self.name}] Created directory: {path}")
            except FileExistsError:
                logger.debug(f"[{self.name}] Directory '{path}' already exists")
            except OSError as e:
                # drive and share roots refuse creation with other errors
                if os.path.isdir(path):
                    logger.debug(f"[{self.name}] Directory '{path}' already exists ({e.errno})")
                    return
                raise OperationFailedError(
                    f"Cannot create directory '{path}' ({e.errno}): {e.strerror or e}", path, code=e.errno
                ) from e


# --------------------
#
# Device-sync Backend
#
# --------------------

class DeviceSyncBackend(Backend):
    """Files on the tethered device, reached through the sync connection"""

    def __init__(self, context: Optional[SyncContext] = None):
        self._context = context
        self.name = "DeviceSyncBackend"

    @property
    def context(self) -> SyncContext:
        return self._context if self._context is not None else get_default_context()

    def _connection(self) -> Transport:
        return self.context.connect()

    @staticmethod
    def _forward(op: str, path: str, call):
        try:
            return call()
        except StreamIOError:
            raise
        except Exception as e:
            raise OperationFailedError(
                f"Device transport failed to {op} '{path}': {e}", path, code=getattr(e, "errno", None)
            ) from e

    @override
    def read_bytes(self, path: PathLike) -> bytes:
        path = str(path)
        return self._forward("read", path, lambda: self._connection().read(path))

    @override
    def write_bytes(self, path: PathLike, content: bytes):
        path = str(path)
        self._forward("write", path, lambda: self._connection().write(path, content))

    @override
    def exists(self, path: PathLike) -> bool:
        path = str(path)
        try:
            return self._connection().file_exists(path)
        except Exception as e:
            logger.debug(f"[{self.name}] Could not confirm '{path}' exists: {e}")
            return False

    @override
    def mkdir(self, path: PathLike):
        path = str(path)
        self._forward("create directory", path, lambda: self._connection().create_directory(path))


# --------------------
#
# Routing Backend
#
# --------------------

class RoutingBackend(Backend):
    """
    Dispatches every operation to the backend registered for the path's kind.
    """

    def __init__(self, context: Optional[SyncContext] = None):
        self._backends: Dict[PathKind, Backend] = {}
        local = LocalBackend()
        self.register_backend(PathKind.LOCAL, local)
        self.register_backend(PathKind.NETWORK, local)
        self.register_backend(PathKind.DEVICE_SYNC, DeviceSyncBackend(context))

    def register_backend(self, kind: PathKind, backend: Backend):
        """Register a backend for a kind of path."""
        self._backends[kind] = backend

    def unregister_backend(self, kind: PathKind):
        """Unregister the backend for a kind of path."""
        if kind in self._backends:
            del self._backends[kind]

    def backend_for(self, path: PathLike) -> Backend:
        """Get the backend owning a path."""
        kind = as_stream_path(path).kind
        backend = self._backends.get(kind)
        if backend is None:
            raise UnknownBackendError(f"No backend registered for {kind.value} path '{path}'", str(path))
        return backend

    @override
    @wrap_io_error
    def read_bytes(self, path: PathLike) -> bytes:
        return self.backend_for(path).read_bytes(path)

    @override
    @wrap_io_error
    def write_bytes(self, path: PathLike, content: bytes):
        return self.backend_for(path).write_bytes(path, content)

    @override
    def exists(self, path: PathLike) -> bool:
        try:
            backend = self.backend_for(path)
        except StreamIOError:
            return False
        return backend.exists(path)

    @override
    @wrap_io_error
    def mkdir(self, path: PathLike):
        return self.backend_for(path).mkdir(path)

    @wrap_io_error
    def copy(self, src: PathLike, dst: PathLike):
        src_backend = self.backend_for(src)
        dst_backend = self.backend_for(dst)
        if src_backend is not dst_backend:
            logger.debug(f"Performing cross-backend copy from '{src}' to '{dst}'")
        dst_backend.write_bytes(dst, src_backend.read_bytes(src))


def create_router(context: Optional[SyncContext] = None) -> RoutingBackend:
    """
    Create a RoutingBackend; device paths use the given context, or the
    process-wide one when omitted.
    """
    return RoutingBackend(context)


def file_exists(path: PathLike, router: Optional[RoutingBackend] = None) -> bool:
    """Check if a file exists on whichever backend owns the path."""
    return (router or create_router()).exists(path)

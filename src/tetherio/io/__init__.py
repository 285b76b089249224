"""
tetherio IO Module

- StreamPath, PathKind, classify, segment: Path classification and segmentation
- Backend: Abstract backend interface
- LocalBackend: Local disk and UNC network paths
- DeviceSyncBackend: Files on the tethered device
- RoutingBackend: Per-kind backend dispatcher
- Transport, MirrorTransport, MemoryTransport, SyncContext: Device-sync connection
- InputStream, OutputStream: Buffered streams
- ensure_directory: Recursive directory creation

Usage:
    from tetherio.io import InputStream, OutputStream, ensure_directory

    ensure_directory(r"\\Storage Card\\XCSoarData")
    with OutputStream(r"\\Storage Card\\XCSoarData\\task.tsk") as out:
        out.write("...")
"""

from .path import (
    PathKind,
    StreamPath,
    classify,
    segment,
    split_file_path,
    device_to_posix,
)
from .transport import (
    Transport,
    FsspecTransport,
    MirrorTransport,
    MemoryTransport,
    SyncContext,
    create_transport,
    get_default_context,
    set_default_context,
)
from .backends import (
    Backend,
    LocalBackend,
    DeviceSyncBackend,
    RoutingBackend,
    create_router,
    file_exists,
    working_directory,
)
from .dirs import ensure_directory
from .stream import StreamState, InputStream, OutputStream, open_stream

__all__ = [
    # Path
    'PathKind',
    'StreamPath',
    'classify',
    'segment',
    'split_file_path',
    'device_to_posix',
    # Transport
    'Transport',
    'FsspecTransport',
    'MirrorTransport',
    'MemoryTransport',
    'SyncContext',
    'create_transport',
    'get_default_context',
    'set_default_context',
    # Backends
    'Backend',
    'LocalBackend',
    'DeviceSyncBackend',
    'RoutingBackend',
    'create_router',
    'file_exists',
    'working_directory',
    # Directories and streams
    'ensure_directory',
    'StreamState',
    'InputStream',
    'OutputStream',
    'open_stream',
]

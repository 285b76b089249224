"""
tetherio

Byte streams over local files, UNC network shares and files on a tethered
mobile device reached through a device-synchronization channel. The kind of a
path decides where its bytes live:

- ``C:\\data\\task.tsk``, ``data/task.tsk``: local filesystem
- ``\\\\server\\share\\task.tsk``: network share (handled by the local backend)
- ``\\Storage Card\\task.tsk``: tethered device

Main modules:
- io: Path classification, backends, device transport, streams, directory creation
- tools: Coordinate and unit conversions
- config: Configuration loading and validation
- utils: Logging and helpers

Quick start example:
```python
from tetherio import Config, InputStream, OutputStream, create_router, ensure_directory

router = create_router(Config("tetherio.yml").create_context())
ensure_directory(r"\\Storage Card\\XCSoarData", router)
with OutputStream(r"\\Storage Card\\XCSoarData\\task.tsk", router) as out:
    out.write(InputStream("task.tsk", router).getvalue())
```
"""

from .io import (
    PathKind,
    StreamPath,
    classify,
    segment,
    Backend,
    LocalBackend,
    DeviceSyncBackend,
    RoutingBackend,
    create_router,
    file_exists,
    SyncContext,
    MirrorTransport,
    MemoryTransport,
    InputStream,
    OutputStream,
    open_stream,
    ensure_directory,
)
from .tools import ddmmff, ddmmss, kmh_to_ms, deg_to_rad, rad_to_deg
from .config import Config, ConfigModel
from .exceptions import (
    TetherIOError,
    ConfigurationError,
    StreamIOError,
    PathNotFoundError,
    OperationFailedError,
    UnknownBackendError,
)

__version__ = "0.3.0"

__all__ = [
    # Version
    '__version__',
    # IO
    'PathKind',
    'StreamPath',
    'classify',
    'segment',
    'Backend',
    'LocalBackend',
    'DeviceSyncBackend',
    'RoutingBackend',
    'create_router',
    'file_exists',
    'SyncContext',
    'MirrorTransport',
    'MemoryTransport',
    'InputStream',
    'OutputStream',
    'open_stream',
    'ensure_directory',
    # Tools
    'ddmmff',
    'ddmmss',
    'kmh_to_ms',
    'deg_to_rad',
    'rad_to_deg',
    # Config
    'Config',
    'ConfigModel',
    # Exceptions
    'TetherIOError',
    'ConfigurationError',
    'StreamIOError',
    'PathNotFoundError',
    'OperationFailedError',
    'UnknownBackendError',
]

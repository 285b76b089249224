"""
Buffered streams over any backend.

An InputStream loads the whole target into memory when it is created; an
OutputStream collects writes in memory and commits them to the backend when
closed.
"""

from enum import Enum
from typing import Iterator, Optional, Union
import io
import logging

from .. import constants
from .backends import Backend, RoutingBackend, create_router
from .path import PathKind, PathLike, StreamPath, as_stream_path
from ..exceptions import StreamClosedError

logger = logging.getLogger(__name__)


class StreamState(Enum):
    CONSTRUCTING = "constructing"
    OPEN = "open"
    CLOSED = "closed"


class Stream:
    """Common state of input and output streams"""

    def __init__(
        self,
        path: PathLike,
        router: Optional[RoutingBackend] = None,
        encoding: str = constants.DEFAULT_ENCODING,
    ):
        self._state = StreamState.CONSTRUCTING
        self._path = as_stream_path(path)
        self._backend: Backend = (router or create_router()).backend_for(self._path)
        self._buffer = io.BytesIO()
        self.encoding = encoding

    @property
    def path(self) -> StreamPath:
        return self._path

    @property
    def kind(self) -> PathKind:
        return self._path.kind

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state is StreamState.CLOSED

    @property
    def buffer(self) -> io.BytesIO:
        self._check_open()
        return self._buffer

    def _check_open(self):
        if self._state is not StreamState.OPEN:
            raise StreamClosedError(f"Stream for '{self._path}' is {self._state.value}", self._path.raw)

    def close(self):
        self._state = StreamState.CLOSED
        self._buffer.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._path!r}, state={self._state.value})"


class InputStream(Stream):
    """Read-only stream, fully loaded from the backend on creation"""

    def __init__(
        self,
        path: PathLike,
        router: Optional[RoutingBackend] = None,
        encoding: str = constants.DEFAULT_ENCODING,
    ):
        super().__init__(path, router, encoding)
        content = self._backend.read_bytes(self._path)
        self._buffer = io.BytesIO(content)
        self._state = StreamState.OPEN
        logger.debug(f"Opened {self.kind.value} input stream '{self._path}' ({len(content)} bytes)")

    def read(self, size: int = -1) -> bytes:
        self._check_open()
        return self._buffer.read(size)

    def readline(self) -> bytes:
        self._check_open()
        return self._buffer.readline()

    def __iter__(self) -> Iterator[bytes]:
        self._check_open()
        return iter(self._buffer)

    def getvalue(self) -> bytes:
        self._check_open()
        return self._buffer.getvalue()

    def read_text(self) -> str:
        return self.getvalue().decode(self.encoding)


class OutputStream(Stream):
    """
    Write stream buffering everything in memory.

    Contents reach the backend on ``flush()`` or ``close()``. ``close()``
    commits exactly once and is the place where commit failures surface;
    leaving a ``with`` block calls it. Pending writes stay pending until a
    commit succeeds.
    """

    def __init__(
        self,
        path: PathLike,
        router: Optional[RoutingBackend] = None,
        encoding: str = constants.DEFAULT_ENCODING,
    ):
        super().__init__(path, router, encoding)
        self._dirty = True
        self._state = StreamState.OPEN

    def write(self, data: Union[bytes, str]) -> int:
        self._check_open()
        if isinstance(data, str):
            data = data.encode(self.encoding)
        self._dirty = True
        return self._buffer.write(data)

    def getvalue(self) -> bytes:
        self._check_open()
        return self._buffer.getvalue()

    def _commit(self):
        content = self._buffer.getvalue()
        logger.debug(f"Committing {len(content)} bytes to {self.kind.value} path '{self._path}'")
        self._backend.write_bytes(self._path, content)
        self._dirty = False

    def flush(self):
        self._check_open()
        if self._dirty:
            self._commit()

    def close(self):
        """
        Commit pending writes and close the stream.

        A failed commit raises and leaves the stream open with its contents,
        so ``close()`` can be retried.
        """
        if self._state is not StreamState.OPEN:
            return
        if self._dirty:
            self._commit()
        self._state = StreamState.CLOSED
        self._buffer.close()


def open_stream(
    path: PathLike,
    mode: str = "r",
    router: Optional[RoutingBackend] = None,
    encoding: str = constants.DEFAULT_ENCODING,
) -> Stream:
    """Open an InputStream (``"r"``) or an OutputStream (``"w"``)."""
    if mode == "r":
        return InputStream(path, router, encoding)
    if mode == "w":
        return OutputStream(path, router, encoding)
    raise ValueError(f"Unsupported stream mode: '{mode}'")

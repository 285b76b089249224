# tetherio\src\tetherio\io\path.py

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union

from .. import constants
from ..exceptions import InvalidPathError


logger = logging.getLogger(__name__)


class PathKind(Enum):
    """Storage backend owning a path"""

    LOCAL = "local"
    NETWORK = "network"
    DEVICE_SYNC = "device_sync"


def classify(path: str) -> PathKind:
    """
    Decide which backend owns a path from its leading characters.

    A single leading backslash followed by anything else marks a path on the
    tethered device, a doubled one a UNC network path. Everything else,
    including the empty string, is local.
    """
    if len(path) > 2 and path[0] == "\\" and path[1] != "\\":
        return PathKind.DEVICE_SYNC
    if path.startswith(constants.UNC_PREFIX):
        return PathKind.NETWORK
    return PathKind.LOCAL


def _find_separator(path: str, start: int) -> int:
    for pos in range(max(start, 0), len(path)):
        if path[pos] in constants.PATH_SEPARATORS:
            return pos
    return -1


def segment(path: str) -> List[str]:
    """
    Split a directory path into the chain of prefixes to create, in order.

    For UNC paths the server and share names form a single prefix, so the
    first segment is ``\\\\server\\share``; a bare server yields nothing.
    A separator at position 0 (device or filesystem root) never ends a segment.
    Empty components are skipped.
    """
    if not path:
        return []

    if classify(path) is PathKind.NETWORK:
        server_end = _find_separator(path, 2)
        if server_end == -1:
            return []
        # skip the server name, the share ends the first segment
        pos = _find_separator(path, server_end + 1)
    elif path[0] in constants.PATH_SEPARATORS:
        pos = _find_separator(path, 1)
    else:
        pos = _find_separator(path, 0)

    segments = []
    while pos != -1:
        if path[pos - 1] not in constants.PATH_SEPARATORS:
            segments.append(path[:pos])
        pos = _find_separator(path, pos + 1)

    if path[-1] not in constants.PATH_SEPARATORS:
        segments.append(path)
    logger.debug(f"Segmented '{path}' into {segments}")
    return segments


def split_file_path(path: str) -> Tuple[str, str]:
    """
    Split a file path into its directory part (trailing separator kept) and file name.
    """
    pos = max(path.rfind(sep) for sep in constants.PATH_SEPARATORS)
    if pos == -1:
        return "", path
    return path[: pos + 1], path[pos + 1 :]


def device_to_posix(path: str) -> str:
    """
    Convert a device path (``\\sub\\file``) to a slash-rooted path (``/sub/file``).
    """
    parts = [p for p in path.replace("\\", "/").split("/") if p]
    return "/" + "/".join(parts)


@dataclass(frozen=True)
class StreamPath:
    """
    A path tagged with its backend kind.

    Decide the kind once, at the boundary, and pass the tagged value around
    instead of re-deriving it from the leading characters of the string.
    """

    raw: str
    kind: PathKind

    @classmethod
    def parse(cls, raw: str) -> "StreamPath":
        return cls(raw, classify(raw))

    @classmethod
    def local(cls, raw: str) -> "StreamPath":
        return cls(raw, PathKind.LOCAL)

    @classmethod
    def network(cls, raw: str) -> "StreamPath":
        if not raw.startswith(constants.UNC_PREFIX):
            raise InvalidPathError(f"Network path must start with '{constants.UNC_PREFIX}': '{raw}'", raw)
        return cls(raw, PathKind.NETWORK)

    @classmethod
    def device(cls, raw: str) -> "StreamPath":
        if not raw.startswith(constants.DEVICE_SEPARATOR) or raw.startswith(constants.UNC_PREFIX):
            raise InvalidPathError(
                f"Device path must start with a single '{constants.DEVICE_SEPARATOR}': '{raw}'", raw
            )
        return cls(raw, PathKind.DEVICE_SYNC)

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}.{self.kind.name}('{self.raw}')"


PathLike = Union[str, StreamPath]


def as_stream_path(path: PathLike) -> StreamPath:
    """Tag a legacy string path, or pass an already tagged path through."""
    if isinstance(path, StreamPath):
        return path
    if not isinstance(path, str):
        raise InvalidPathError(f"Expected a path string, got {type(path).__name__}")
    return StreamPath.parse(path)

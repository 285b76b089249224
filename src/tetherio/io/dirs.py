import logging
from typing import Optional

from .backends import RoutingBackend, create_router
from .path import PathLike, as_stream_path, segment

logger = logging.getLogger(__name__)


def ensure_directory(path: PathLike, router: Optional[RoutingBackend] = None):
    """
    Create a directory and every missing parent.

    The path is segmented according to its kind and each prefix is created in
    order on the owning backend. Existing directories are skipped; the first
    other failure is raised and directories created before it are kept.
    """
    sp = as_stream_path(path)
    if not sp.raw:
        return
    router = router or create_router()
    backend = router.backend_for(sp)
    segments = segment(sp.raw)
    logger.debug(f"Ensuring {sp.kind.value} directory '{sp}' ({len(segments)} segments)")
    for sub_dir in segments:
        backend.mkdir(sub_dir)

import pytest

from tetherio.exceptions import OperationFailedError
from tetherio.io import MemoryTransport, SyncContext, create_router, set_default_context


@pytest.fixture
def transport():
    """In-memory device shared by the context and the test."""
    return MemoryTransport()


@pytest.fixture
def context(transport):
    ctx = SyncContext(lambda: transport)
    yield ctx
    ctx.disconnect()


@pytest.fixture
def router(context):
    return create_router(context)


@pytest.fixture(autouse=True)
def isolated_default_context():
    """Give every test a fresh process-wide device context."""
    set_default_context(SyncContext())
    yield
    set_default_context(None)


class RecordingBackend:
    """
    Backend double recording every call; fails mkdir for paths in `fail_on`
    and the first `failed_writes` calls to write_bytes.
    """

    def __init__(self, fail_on=(), failed_writes=0):
        self.calls = []
        self.files = {}
        self.fail_on = set(fail_on)
        self.failed_writes = failed_writes

    def read_bytes(self, path):
        self.calls.append(("read", str(path)))
        return self.files[str(path)]

    def write_bytes(self, path, content):
        self.calls.append(("write", str(path)))
        if self.failed_writes:
            self.failed_writes -= 1
            raise OperationFailedError(f"Couldn't write file '{path}'", str(path), code=5)
        self.files[str(path)] = content

    def exists(self, path):
        return str(path) in self.files

    def mkdir(self, path):
        self.calls.append(("mkdir", str(path)))
        if str(path) in self.fail_on:
            raise OperationFailedError(f"Cannot create directory '{path}'", str(path), code=5)


@pytest.fixture
def recording():
    return RecordingBackend

import pytest

from tetherio.io import InputStream, OutputStream, StreamState, open_stream
from tetherio.io.path import PathKind, StreamPath
from tetherio.exceptions import (
    OperationFailedError,
    PathNotFoundError,
    StreamClosedError,
    UnknownBackendError,
)


class TestInputStream:

    def test_reads_whole_file_on_creation(self, tmp_path, router):
        target = tmp_path / "task.tsk"
        target.write_bytes(b"line one\nline two\n")
        stream = InputStream(str(target), router)
        target.unlink()
        assert stream.state is StreamState.OPEN
        assert stream.kind is PathKind.LOCAL
        assert stream.readline() == b"line one\n"
        assert stream.read() == b"line two\n"
        assert stream.getvalue() == b"line one\nline two\n"

    def test_iterates_lines(self, tmp_path, router):
        target = tmp_path / "lines.txt"
        target.write_bytes(b"a\nb\nc")
        with InputStream(str(target), router) as stream:
            assert list(stream) == [b"a\n", b"b\n", b"c"]

    def test_read_text(self, tmp_path, router):
        target = tmp_path / "latin.txt"
        target.write_bytes("Żar".encode("cp1250"))
        with InputStream(str(target), router, encoding="cp1250") as stream:
            assert stream.read_text() == "Żar"

    def test_device_file(self, router, transport):
        transport.write(r"\task.tsk", b"on device")
        with InputStream(r"\task.tsk", router) as stream:
            assert stream.kind is PathKind.DEVICE_SYNC
            assert stream.read() == b"on device"

    def test_missing_file_fails_construction(self, tmp_path, router):
        with pytest.raises(PathNotFoundError):
            InputStream(str(tmp_path / "missing"), router)
        with pytest.raises(PathNotFoundError):
            InputStream(r"\missing", router)

    def test_unknown_backend_fails_construction(self, router):
        router.unregister_backend(PathKind.DEVICE_SYNC)
        with pytest.raises(UnknownBackendError):
            InputStream(r"\task.tsk", router)

    def test_closed_stream_rejects_reads(self, tmp_path, router):
        target = tmp_path / "f"
        target.write_bytes(b"x")
        stream = InputStream(str(target), router)
        stream.close()
        assert stream.closed
        with pytest.raises(StreamClosedError):
            stream.read()
        with pytest.raises(StreamClosedError):
            stream.buffer


class TestOutputStream:

    def test_commits_on_close(self, tmp_path, router):
        target = tmp_path / "out.txt"
        stream = OutputStream(str(target), router)
        stream.write(b"hello ")
        stream.write("world")
        assert not target.exists()
        stream.close()
        assert target.read_bytes() == b"hello world"
        assert stream.state is StreamState.CLOSED

    def test_with_block_commits(self, router, transport):
        with OutputStream(r"\out.txt", router) as out:
            out.write(b"device bytes")
        assert transport.read(r"\out.txt") == b"device bytes"

    def test_commits_exactly_once(self, router, recording):
        fake = recording()
        router.register_backend(PathKind.DEVICE_SYNC, fake)
        stream = OutputStream(r"\out.txt", router)
        stream.write(b"data")
        stream.close()
        stream.close()
        assert fake.calls == [("write", r"\out.txt")]
        assert fake.files[r"\out.txt"] == b"data"

    def test_flush_then_close(self, router, recording):
        fake = recording()
        router.register_backend(PathKind.DEVICE_SYNC, fake)
        with OutputStream(r"\out.txt", router) as out:
            out.write(b"first")
            out.flush()
            out.flush()
            out.write(b" second")
        assert fake.calls == [("write", r"\out.txt"), ("write", r"\out.txt")]
        assert fake.files[r"\out.txt"] == b"first second"

    def test_empty_stream_creates_empty_file(self, tmp_path, router):
        target = tmp_path / "empty.txt"
        OutputStream(str(target), router).close()
        assert target.read_bytes() == b""

    def test_commits_when_body_raises(self, tmp_path, router):
        target = tmp_path / "partial.txt"
        with pytest.raises(RuntimeError):
            with OutputStream(str(target), router) as out:
                out.write(b"partial")
                raise RuntimeError("interrupted")
        assert target.read_bytes() == b"partial"

    def test_commit_failure_surfaces_from_close(self, router, transport):
        stream = OutputStream(r"\nodir\out.txt", router)
        stream.write(b"kept")
        with pytest.raises(OperationFailedError):
            stream.close()
        assert stream.state is StreamState.OPEN
        assert stream.getvalue() == b"kept"

        transport.create_directory(r"\nodir")
        stream.close()
        assert stream.closed
        assert transport.read(r"\nodir\out.txt") == b"kept"
        stream.close()

    def test_close_commits_after_failed_flush(self, router, recording):
        fake = recording(failed_writes=1)
        router.register_backend(PathKind.DEVICE_SYNC, fake)
        stream = OutputStream(r"\out.txt", router)
        stream.write(b"payload")
        with pytest.raises(OperationFailedError):
            stream.flush()
        stream.close()
        assert fake.calls == [("write", r"\out.txt"), ("write", r"\out.txt")]
        assert fake.files[r"\out.txt"] == b"payload"

    def test_encoding(self, tmp_path, router):
        target = tmp_path / "enc.txt"
        with OutputStream(str(target), router, encoding="utf-16-le") as out:
            out.write("ab")
        assert target.read_bytes() == "ab".encode("utf-16-le")

    def test_closed_stream_rejects_writes(self, tmp_path, router):
        stream = OutputStream(str(tmp_path / "f"), router)
        stream.close()
        with pytest.raises(StreamClosedError):
            stream.write(b"late")
        with pytest.raises(StreamClosedError):
            stream.flush()

    def test_tagged_path(self, tmp_path, router, recording):
        fake = recording()
        router.register_backend(PathKind.LOCAL, fake)
        with OutputStream(StreamPath.local(r"\sub\f.txt"), router) as out:
            out.write(b"x")
        assert fake.calls == [("write", r"\sub\f.txt")]


class TestOpenStream:

    def test_modes(self, tmp_path, router):
        target = str(tmp_path / "f.txt")
        with open_stream(target, "w", router) as out:
            assert isinstance(out, OutputStream)
            out.write(b"x")
        with open_stream(target, router=router) as inp:
            assert isinstance(inp, InputStream)
            assert inp.read() == b"x"

    def test_invalid_mode(self, tmp_path, router):
        with pytest.raises(ValueError):
            open_stream(str(tmp_path / "f.txt"), "a", router)

    def test_repr(self, tmp_path, router):
        stream = OutputStream(str(tmp_path / "f.txt"), router)
        assert repr(stream).startswith("OutputStream(StreamPath.LOCAL(")
        assert "state=open" in repr(stream)
        stream.close()
        assert "state=closed" in repr(stream)

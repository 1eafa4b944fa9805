"""Tests for readbadflash.io.chunkio module.

Tests cover:
- Read classification (full, end of input, error)
- Short reads and short writes
- Open/seek failures and their cleanup
"""

import errno
import io

import pytest

from readbadflash import DestOpenError, ReadOutcome, SourceOpenError, WriteError
from readbadflash.io import chunkio

from conftest import FlakyDevice


# =============================================================================
# read_chunk
# =============================================================================


class TestReadChunk:
    def test_full_chunk(self):
        buf = bytearray(4)
        result = chunkio.read_chunk(io.BytesIO(b'abcdefg'), buf)
        assert result.outcome is ReadOutcome.FULL
        assert result.nbytes == 4
        assert result.error is None
        assert buf == b'abcd'

    def test_partial_chunk_at_end_of_input(self):
        buf = bytearray(b'XXXX')
        f = io.BytesIO(b'abcdef')
        f.seek(4)
        result = chunkio.read_chunk(f, buf)
        assert result.outcome is ReadOutcome.END_OF_INPUT
        assert result.nbytes == 2
        assert buf[:2] == b'ef'

    def test_empty_read_at_end_of_input(self):
        result = chunkio.read_chunk(io.BytesIO(b''), bytearray(4))
        assert result.outcome is ReadOutcome.END_OF_INPUT
        assert result.nbytes == 0

    def test_short_reads_are_continued(self):
        device = FlakyDevice(b'0123456789', max_read=1)
        buf = bytearray(8)
        result = chunkio.read_chunk(device('x'), buf)
        assert result.outcome is ReadOutcome.FULL
        assert buf == b'01234567'

    def test_error_after_partial_data(self):
        device = FlakyDevice(b'0123456789', bad={(3, 5): None})
        result = chunkio.read_chunk(device('x'), bytearray(8))
        assert result.outcome is ReadOutcome.ERROR
        assert result.nbytes == 3
        assert result.error.errno == errno.EIO

    def test_error_without_data(self):
        device = FlakyDevice(b'0123456789', bad={(0, 4): None})
        result = chunkio.read_chunk(device('x'), bytearray(4))
        assert result.outcome is ReadOutcome.ERROR
        assert result.nbytes == 0

    def test_buffer_can_be_reused_after_error(self):
        device = FlakyDevice(b'0123456789', bad={(0, 4): None})
        buf = bytearray(4)
        chunkio.read_chunk(device('x'), buf)
        chunkio.zero_fill(buf)
        assert buf == b'\0\0\0\0'


# =============================================================================
# write_chunk and zero_fill
# =============================================================================


class _TrickleWriter(io.RawIOBase):
    """Accepts at most two bytes per write call."""

    def __init__(self):
        self.data = bytearray()

    def writable(self):
        return True

    def write(self, b):
        chunk = bytes(b[:2])
        self.data += chunk
        return len(chunk)


class _StuckWriter(io.RawIOBase):
    def writable(self):
        return True

    def write(self, b):
        return 0


class _FailingWriter(io.RawIOBase):
    def writable(self):
        return True

    def write(self, b):
        raise OSError(errno.EIO, 'Input/output error')


class TestWriteChunk:
    def test_writes_prefix_only(self):
        out = io.BytesIO()
        n = chunkio.write_chunk(out, bytearray(b'abcdef'), 3, 0)
        assert n == 3
        assert out.getvalue() == b'abc'

    def test_short_writes_are_continued(self):
        out = _TrickleWriter()
        assert chunkio.write_chunk(out, bytearray(b'abcdefg'), 7, 0) == 7
        assert out.data == b'abcdefg'

    def test_zero_length_write_is_an_error(self):
        with pytest.raises(WriteError) as excinfo:
            chunkio.write_chunk(_StuckWriter(), bytearray(4), 4, 12)
        assert excinfo.value.offset == 12
        assert excinfo.value.size == 4

    def test_os_error_is_wrapped(self):
        with pytest.raises(WriteError) as excinfo:
            chunkio.write_chunk(_FailingWriter(), bytearray(4), 4, 0)
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_zero_fill(self):
        buf = bytearray(b'\xff' * 16)
        chunkio.zero_fill(buf)
        assert buf == bytes(16)
        assert len(buf) == 16


# =============================================================================
# open_source / open_dest
# =============================================================================


class TestOpen:
    def test_open_source_seeks(self, tmp_path):
        path = tmp_path / 'in.bin'
        path.write_bytes(b'0123456789')
        with chunkio.open_source(path, 6) as f:
            assert f.tell() == 6
            assert f.read() == b'6789'

    def test_open_source_is_unbuffered(self, tmp_path):
        path = tmp_path / 'in.bin'
        path.write_bytes(b'x')
        with chunkio.open_source(path, 0) as f:
            assert isinstance(f, io.FileIO)

    def test_open_source_missing(self, tmp_path):
        with pytest.raises(SourceOpenError) as excinfo:
            chunkio.open_source(tmp_path / 'missing', 0)
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)

    def test_seek_failure_closes_source(self):
        class Unseekable(io.RawIOBase):
            def seek(self, offset, whence=0):
                raise OSError(errno.ESPIPE, 'Illegal seek')

        f = Unseekable()
        with pytest.raises(SourceOpenError):
            chunkio.open_source('pipe', 5, opener=lambda path: f)
        assert f.closed

    def test_open_dest_truncates(self, tmp_path):
        path = tmp_path / 'out.bin'
        path.write_bytes(b'old content')
        with chunkio.open_dest(path) as f:
            f.write(b'new')
        assert path.read_bytes() == b'new'

    def test_open_dest_on_directory(self, tmp_path):
        with pytest.raises(DestOpenError):
            chunkio.open_dest(tmp_path)

"""
Chunk-granular file I/O for reading from unreliable sources.

Files are opened unbuffered so that every read and write maps onto the OS calls, and an
I/O error raised by the device is seen at the chunk where it happened, together with the
number of bytes that arrived before it.
"""

import io
import os

from ..core.types import ChunkRead, ReadOutcome
from ..exceptions import DestOpenError, SourceOpenError, WriteError

__all__ = [
    'open_source',
    'open_dest',
    'read_chunk',
    'write_chunk',
    'zero_fill',
]


def _open_source_raw(path):
    return open(path, 'rb', buffering=0)


def _open_dest_raw(path):
    return open(path, 'wb', buffering=0)


def open_source(path, offset, opener=None):
    """Open the input file and position it at the given offset.

    Args:
        path: input file path.
        offset: absolute byte offset to seek to before returning.
        opener: callable taking a path and returning a binary file object.
            Defaults to an unbuffered ``open(path, 'rb')``.

    Raises:
        SourceOpenError: if the file cannot be opened or seeked. The file is closed first.
    """
    opener = opener or _open_source_raw
    try:
        f = opener(path)
    except OSError as e:
        raise SourceOpenError(os.fspath(path)) from e

    try:
        f.seek(offset, os.SEEK_SET)
    except (OSError, io.UnsupportedOperation) as e:
        f.close()
        raise SourceOpenError(os.fspath(path)) from e
    return f


def open_dest(path, opener=None):
    """Create or truncate the output file.

    Raises:
        DestOpenError: if the file cannot be created.
    """
    opener = opener or _open_dest_raw
    try:
        return opener(path)
    except OSError as e:
        raise DestOpenError(os.fspath(path)) from e


def read_chunk(fileobj, buf):
    """Fill ``buf`` from ``fileobj``, classifying how the read ended.

    Short reads are retried until the buffer is full. A read that returns no data marks the
    end of the input. An OSError before the buffer is full is a read error, even when no
    bytes were read at all.

    Returns:
        ChunkRead with the outcome and the number of valid bytes at the start of ``buf``.
    """
    size = len(buf)
    nbytes = 0
    with memoryview(buf) as view:
        try:
            while nbytes < size:
                n = fileobj.readinto(view[nbytes:])
                if not n:
                    return ChunkRead(ReadOutcome.END_OF_INPUT, nbytes)
                nbytes += n
        except OSError as e:
            return ChunkRead(ReadOutcome.ERROR, nbytes, e)
    return ChunkRead(ReadOutcome.FULL, nbytes)


def write_chunk(fileobj, buf, size, offset):
    """Write the first ``size`` bytes of ``buf``, looping over short writes.

    Args:
        fileobj: destination file object.
        buf: working buffer.
        size: number of bytes to write.
        offset: destination offset of the write, used for error reporting.

    Returns:
        Number of bytes written, always ``size``.

    Raises:
        WriteError: if the bytes could not all be written.
    """
    written = 0
    with memoryview(buf) as whole, whole[:size] as view:
        try:
            while written < size:
                n = fileobj.write(view[written:])
                if not n:
                    raise WriteError(offset, size)
                written += n
        except OSError as e:
            raise WriteError(offset, size) from e
    return written


def zero_fill(buf):
    """Overwrite the whole buffer with zero bytes."""
    buf[:] = bytes(len(buf))

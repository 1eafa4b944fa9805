"""Fault-injecting file objects shared by the test modules."""

import errno
import io

import pytest


class FlakyDevice:
    """In-memory stand-in for a failing device.

    Byte ranges listed in ``bad`` raise EIO when a read reaches them. Each range fails
    ``failures`` times (None: forever), counted per failed read across reopens.
    """

    def __init__(self, data, bad=None, max_read=None):
        self.data = bytes(data)
        self.bad = {rng: failures for rng, failures in (bad or {}).items()}
        self.max_read = max_read
        self.opened = []
        self.closed = 0

    def __call__(self, path):
        f = FlakyFile(self)
        self.opened.append(f)
        return f

    @property
    def seeks(self):
        return [f.first_seek for f in self.opened]

    def failing_range_at(self, pos, end):
        """First range still failing that intersects [pos, end)."""
        for (start, stop), failures in sorted(self.bad.items()):
            if failures == 0:
                continue
            if start < end and pos < stop:
                return start, stop
        return None


class FlakyFile(io.RawIOBase):
    def __init__(self, device):
        self.device = device
        self.pos = 0
        self.first_seek = None

    def readable(self):
        return True

    def seekable(self):
        return True

    def seek(self, offset, whence=io.SEEK_SET):
        assert whence == io.SEEK_SET
        if self.first_seek is None:
            self.first_seek = offset
        self.pos = offset
        return offset

    def readinto(self, b):
        want = len(b)
        if self.device.max_read is not None:
            want = min(want, self.device.max_read)
        end = min(self.pos + want, len(self.device.data))
        bad = self.device.failing_range_at(self.pos, max(end, self.pos + 1))
        if bad is not None:
            start, _ = bad
            if start <= self.pos:
                failures = self.device.bad[bad]
                if failures is not None:
                    self.device.bad[bad] = failures - 1
                raise OSError(errno.EIO, 'Input/output error')
            end = start
        n = max(end - self.pos, 0)
        b[:n] = self.device.data[self.pos:self.pos + n]
        self.pos += n
        return n

    def close(self):
        if not self.closed:
            self.device.closed += 1
        super().close()


class MemoryDest(io.BytesIO):
    """BytesIO that keeps its contents after being closed."""

    def __init__(self, fail_when=None):
        super().__init__()
        self.fail_when = fail_when
        self.value = None

    def __call__(self, path):
        return self

    def write(self, b):
        if self.fail_when is not None and self.fail_when(len(b)):
            raise OSError(errno.ENOSPC, 'No space left on device')
        return super().write(b)

    def close(self):
        if not self.closed:
            self.value = self.getvalue()
        super().close()


@pytest.fixture
def memory_dest():
    return MemoryDest()

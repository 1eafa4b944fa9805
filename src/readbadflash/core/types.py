from enum import Enum, auto
from typing import Optional

CHUNK_SIZE_DEFAULT = 1000000  #: Bytes per chunk when no chunk size is given
PATH_MAX = 4096  #: Longest accepted output path, in encoded bytes


class RecoveryMode(Enum):
    """How read errors are resolved.

    The mode starts as ASK_EACH_TIME and can only move to ALWAYS_ZERO_FILL.
    """

    ASK_EACH_TIME = auto()
    """Prompt the operator for every chunk that fails to read"""

    ALWAYS_ZERO_FILL = auto()
    """Replace every failing chunk with zeros without prompting"""


class Decision(Enum):
    """Resolution of a single read error."""

    RETRY = auto()
    """Reopen the source and read the same chunk again"""

    ZERO_FILL = auto()
    """Write a chunk of zeros in place of the unreadable data and move on"""


class ReadOutcome(Enum):
    """Classification of one chunk read."""

    FULL = auto()
    """The whole chunk was read"""

    END_OF_INPUT = auto()
    """The source ran out of data, possibly after a partial chunk"""

    ERROR = auto()
    """An I/O error interrupted the read before the chunk was complete"""


class ChunkRead:
    """Result of reading one chunk into the working buffer.

    Args:
        outcome: how the read ended
        nbytes: number of valid bytes at the start of the buffer
        error: the OSError that interrupted the read, if any
    """

    __slots__ = ('outcome', 'nbytes', 'error')

    def __init__(self, outcome: ReadOutcome, nbytes: int, error: Optional[OSError] = None):
        self.outcome = outcome
        self.nbytes = nbytes
        self.error = error

    def __repr__(self):
        return f'ChunkRead({self.outcome.name}, nbytes={self.nbytes}, error={self.error!r})'


class CopyStats:
    """Counters describing what happened during a recovery run."""

    __slots__ = (
        'chunks_copied',
        'chunks_zero_filled',
        'retries',
        'read_errors',
        'bytes_written',
        'completed',
    )

    def __init__(self):
        self.chunks_copied = 0
        """Chunks read and written in full"""

        self.chunks_zero_filled = 0
        """Chunks replaced by zeros"""

        self.retries = 0
        """Read attempts repeated on operator request"""

        self.read_errors = 0
        """Failed chunk reads, including those later retried successfully"""

        self.bytes_written = 0
        """Total bytes written to the output file"""

        self.completed = False
        """True once end-of-input was reached"""

    def __repr__(self):
        fields = ', '.join(f'{name}={getattr(self, name)!r}' for name in self.__slots__)
        return f'CopyStats({fields})'

"""Session configuration: resolves and validates the parameters of a recovery run."""

import os
from dataclasses import dataclass
from typing import Optional, Union

from ..core.types import CHUNK_SIZE_DEFAULT, PATH_MAX
from ..exceptions import InvalidConfigError

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class Configuration:
    """Immutable parameters of one recovery run."""
    input_path: PathLike
    output_path: PathLike
    chunk_size: int = CHUNK_SIZE_DEFAULT
    start_offset: int = 0
    end_offset: Optional[int] = None  # Only checked once, before any I/O

    @property
    def no_op(self) -> bool:
        """True if the start offset is already at or past the end offset."""
        return self.end_offset is not None and self.start_offset >= self.end_offset

    def offset_of(self, chunk_index: int) -> int:
        """Absolute source offset of the chunk with the given index."""
        return chunk_index * self.chunk_size + self.start_offset


def build_configuration(
    input_path: PathLike,
    output_path: PathLike,
    chunk_size: Optional[int] = None,
    start_offset: Optional[int] = 0,
    end_offset: Optional[int] = None,
) -> Configuration:
    """Validate the raw parameters of a run and build its configuration.

    Args:
        input_path: file to recover data from.
        output_path: file to write to, created or truncated when the run starts.
        chunk_size: bytes per read/write unit. None selects ``CHUNK_SIZE_DEFAULT``.
        start_offset: source offset to start copying from. None means 0.
        end_offset: if given and not after ``start_offset``, the run has nothing to do.
            0 and None both mean no bound.

    Returns:
        The validated configuration. Check ``Configuration.no_op`` before running it.

    Raises:
        InvalidConfigError: if the chunk size is not positive, an offset is negative, or the
            output path is too long.
    """
    if chunk_size is None:
        chunk_size = CHUNK_SIZE_DEFAULT
    if chunk_size <= 0:
        raise InvalidConfigError('[chunk-size] can not be zero')

    if start_offset is None:
        start_offset = 0
    if start_offset < 0:
        raise InvalidConfigError('[start-offset] can not be negative')

    if end_offset is not None and end_offset < 0:
        raise InvalidConfigError('[end-offset] can not be negative')
    if end_offset == 0:
        end_offset = None

    if len(os.fsencode(output_path)) > PATH_MAX:
        raise InvalidConfigError('<out-file> is too long')

    return Configuration(
        input_path=input_path,
        output_path=output_path,
        chunk_size=chunk_size,
        start_offset=start_offset,
        end_offset=end_offset,
    )

"""The chunked copy loop: reads a source chunk by chunk and survives read errors."""

import sys

from ..core.config import Configuration
from ..core.policy import RecoveryPolicy
from ..core.types import CopyStats, Decision, ReadOutcome
from ..exceptions import BufferAllocationError, WriteError
from ..io.chunkio import open_dest, open_source, read_chunk, write_chunk, zero_fill


class ChunkCopier:
    """Copies ``config.input_path`` to ``config.output_path`` one chunk at a time.

    Each chunk is read into a single working buffer and written to the output at the same
    relative offset. A chunk that fails to read is handed to the recovery policy, which
    either asks for the same chunk to be read again or has it replaced by zeros. The source
    is closed after every read error and reopened at the chunk's offset on the next attempt,
    so a retry always starts from a freshly opened file.

    The output file is created when the first chunk is about to be read and stays open until
    the run ends. Both files are closed on every exit path of :meth:`run`.

    Args:
        config: validated run configuration.
        policy: recovery policy. Defaults to an interactive policy on stdin/stdout.
        source_opener: callable returning a binary file object for the input path.
        dest_opener: callable returning a binary file object for the output path.
        output_stream: progress messages go here. Defaults to ``sys.stdout``.
        error_stream: error messages go here. Defaults to ``sys.stderr``.
    """

    def __init__(
        self,
        config: Configuration,
        policy=None,
        source_opener=None,
        dest_opener=None,
        output_stream=None,
        error_stream=None,
    ):
        self.config = config
        self.policy = policy if policy is not None else RecoveryPolicy()
        self.source_opener = source_opener
        self.dest_opener = dest_opener
        self.output_stream = output_stream
        self.error_stream = error_stream

        self.chunk_index = 0
        self.stats = CopyStats()
        self._source = None
        self._dest = None

    @property
    def offset(self) -> int:
        """Absolute source offset of the current chunk."""
        return self.config.offset_of(self.chunk_index)

    def run(self) -> CopyStats:
        """Copy until the end of the input is reached.

        Returns:
            Statistics of the run. ``completed`` is True when the end of the input was
            reached, or when the configuration has nothing to do.

        Raises:
            SourceOpenError: if the input cannot be (re)opened.
            DestOpenError: if the output cannot be created.
            WriteError: if a full or zero-filled chunk cannot be written.
            PromptInputError: if no decision can be read from the operator.
            BufferAllocationError: if the working buffer cannot be allocated.
        """
        if self.config.no_op:
            self.stats.completed = True
            return self.stats

        buf = self._allocate_buffer()
        try:
            while not self.stats.completed:
                self._ensure_source_open()
                self._ensure_dest_open()
                self._step(buf)
        finally:
            self.close()
        return self.stats

    def close(self):
        """Close both files, if open."""
        try:
            self._close_source()
        finally:
            if self._dest is not None:
                dest, self._dest = self._dest, None
                dest.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _step(self, buf):
        chunk_size = self.config.chunk_size
        offset = self.offset
        self._print(f'trying to read {chunk_size} bytes at {offset}... ', end='')
        result = read_chunk(self._source, buf)
        self._print(_describe_count(result.nbytes))

        if result.outcome is ReadOutcome.FULL:
            self._write(buf, chunk_size)
            self.stats.chunks_copied += 1
            self.chunk_index += 1
        elif result.outcome is ReadOutcome.END_OF_INPUT:
            self._finish(buf, result.nbytes)
        else:
            self._recover(buf, offset, result.error)

    def _finish(self, buf, nbytes):
        if nbytes:
            try:
                self._write(buf, nbytes)
            except WriteError as e:
                # The run still counts as finished, the error is only reported
                self._print_error(str(e))
        self.close()
        self.stats.completed = True
        self._print('finished')

    def _recover(self, buf, offset, error):
        self.stats.read_errors += 1
        self._print_error(f'error when reading from byte {offset}: {error}')
        self._close_source()

        decision = self.policy.decide()
        if decision is Decision.ZERO_FILL:
            zero_fill(buf)
            self._write(buf, self.config.chunk_size)
            self.stats.chunks_zero_filled += 1
            self.chunk_index += 1
        else:
            self.stats.retries += 1
            self._print('retrying...')

    def _write(self, buf, size):
        dest_offset = self.chunk_index * self.config.chunk_size
        self.stats.bytes_written += write_chunk(self._dest, buf, size, dest_offset)

    def _allocate_buffer(self):
        try:
            return bytearray(self.config.chunk_size)
        except (MemoryError, OverflowError) as e:
            raise BufferAllocationError(self.config.chunk_size) from e

    def _ensure_source_open(self):
        if self._source is None:
            self._source = open_source(self.config.input_path, self.offset, self.source_opener)

    def _ensure_dest_open(self):
        if self._dest is None:
            self._dest = open_dest(self.config.output_path, self.dest_opener)

    def _close_source(self):
        if self._source is not None:
            source, self._source = self._source, None
            source.close()

    def _print(self, message, end='\n'):
        print(message, end=end, file=self.output_stream or sys.stdout, flush=True)

    def _print_error(self, message):
        print(message, file=self.error_stream or sys.stderr, flush=True)


def _describe_count(nbytes):
    if nbytes == 0:
        return 'no bytes were read'
    if nbytes == 1:
        return '1 byte was read'
    return f'{nbytes} bytes were read'

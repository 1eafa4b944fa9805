"""High-level convenience function for running a recovery."""

from .core.config import build_configuration
from .core.engine import ChunkCopier
from .core.policy import RecoveryPolicy


def recover(
    input_path,
    output_path,
    chunk_size=None,
    start_offset=0,
    end_offset=None,
    input_stream=None,
    output_stream=None,
    error_stream=None,
):
    """Copy a file from a failing device, asking how to handle unreadable chunks.

    Args:
        input_path: file to recover.
        output_path: file to write, created or truncated.
        chunk_size: bytes per read/write unit. None selects the default of 1000000.
        start_offset: source offset to start copying from.
        end_offset: if given and not after ``start_offset``, nothing is done.
        input_stream: where operator answers are read from. Default: ``sys.stdin``.
        output_stream: where progress and prompts are written. Default: ``sys.stdout``.
        error_stream: where error messages are written. Default: ``sys.stderr``.

    Returns:
        CopyStats: what happened during the run.
    """
    config = build_configuration(input_path, output_path, chunk_size, start_offset, end_offset)
    policy = RecoveryPolicy(input_stream=input_stream, output_stream=output_stream)
    copier = ChunkCopier(
        config, policy=policy, output_stream=output_stream, error_stream=error_stream
    )
    return copier.run()

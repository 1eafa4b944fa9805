"""I/O utilities for readbadflash."""

from .chunkio import open_source, open_dest, read_chunk, write_chunk, zero_fill

__all__ = ['open_source', 'open_dest', 'read_chunk', 'write_chunk', 'zero_fill']

"""Readbadflash copies files from faulty storage devices, chunk by chunk, retrying or
zero-filling the chunks that fail to read."""

try:
    from ._version import version as __version__
except ImportError:
    __version__ = "0.0.0.dev0"

# Configuration and engine
from .core.config import Configuration, build_configuration
from .core.engine import ChunkCopier
from .core.policy import RecoveryPolicy

# Data types
from .core.types import (
    CHUNK_SIZE_DEFAULT,
    ChunkRead,
    CopyStats,
    Decision,
    ReadOutcome,
    RecoveryMode,
)

# Exceptions
from .exceptions import (
    BufferAllocationError,
    DestOpenError,
    InvalidConfigError,
    PromptInputError,
    ReadBadFlashError,
    SourceOpenError,
    WriteError,
)

# Convenience API
from ._api import recover

__all__ = [
    # Version
    "__version__",
    # Configuration and engine
    "Configuration",
    "build_configuration",
    "ChunkCopier",
    "RecoveryPolicy",
    # Data types
    "CHUNK_SIZE_DEFAULT",
    "ChunkRead",
    "CopyStats",
    "Decision",
    "ReadOutcome",
    "RecoveryMode",
    # Exceptions
    "BufferAllocationError",
    "DestOpenError",
    "InvalidConfigError",
    "PromptInputError",
    "ReadBadFlashError",
    "SourceOpenError",
    "WriteError",
    # Convenience API
    "recover",
]

"""Exceptions indicating the ways a recovery run can fail"""


class ReadBadFlashError(Exception):
    """Base class for all exceptions in readbadflash"""

    def __init__(self, message: str):
        super().__init__(message)


class InvalidConfigError(ReadBadFlashError, ValueError):
    """Exception raised when the session configuration is not usable.

    Inherits from ValueError so callers validating arguments can catch it generically.
    """

    def __init__(self, message: str):
        super().__init__(message)


class BufferAllocationError(ReadBadFlashError, MemoryError):
    """Exception raised when the working buffer for a chunk cannot be allocated

    Args:
        chunk_size: the requested buffer size in bytes
    """

    def __init__(self, chunk_size: int):
        super().__init__(
            f'Can not allocate {chunk_size} bytes of memory, '
            'try to use a smaller value for [chunk-size]'
        )


class SourceOpenError(ReadBadFlashError):
    """Exception raised when the input file cannot be opened or positioned

    Args:
        path: path to the input file
    """

    def __init__(self, path: str):
        super().__init__(f'Can not open the input file: {path}')


class DestOpenError(ReadBadFlashError):
    """Exception raised when the output file cannot be created

    Args:
        path: path to the output file
    """

    def __init__(self, path: str):
        super().__init__(f'Can not create an output file: {path}')


class WriteError(ReadBadFlashError):
    """Exception raised when a chunk could not be written to the output file in full

    Args:
        offset: output offset at which the chunk should have been written
        size: number of bytes that should have been written
    """

    def __init__(self, offset: int, size: int):
        super().__init__(f'Write error: {size} bytes at output offset {offset}')
        self.offset = offset
        self.size = size


class PromptInputError(ReadBadFlashError):
    """Exception raised when no recovery decision could be read from the operator"""

    def __init__(self, message: str = 'Can not read user input'):
        super().__init__(message)

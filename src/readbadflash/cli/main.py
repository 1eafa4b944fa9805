"""Command line interface: read-bad-flash <in-file> <out-file> [chunk-size] [start-offset] [end-offset]"""

import argparse
import sys

import readbadflash
from ..core.config import build_configuration
from ..core.engine import ChunkCopier
from ..core.policy import RecoveryPolicy
from ..exceptions import ReadBadFlashError
from ..util.misc import parse_size


def _parse_arg(parser, value, name):
    if value is None:
        return None
    try:
        return parse_size(value)
    except ValueError:
        parser.error(f'{name} must be a non-negative integer, got {value!r}')


def _format_size(size):
    for unit in ['', 'K', 'M', 'G', 'T']:
        if abs(size) < 1024:
            if unit == '':
                return str(int(round(size)))
            return f'{size:.1f}{unit}'
        size /= 1024
    return f'{size:.1f}P'


def _print_summary(stats):
    """Print what the run did."""
    print(f'Chunks copied:       {stats.chunks_copied}')
    print(f'Chunks zero-filled:  {stats.chunks_zero_filled}')
    print(f'Read errors:         {stats.read_errors}')
    print(f'Retries:             {stats.retries}')
    print(f'Bytes written:       {_format_size(stats.bytes_written)}')


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='read-bad-flash',
        description='Copy a file from a faulty device chunk by chunk. Chunks that fail to '
        'read can be retried or replaced with zeros.',
        epilog='Put -- before the paths if the input file name starts with a dash.',
    )
    parser.add_argument('in_file', nargs='?', metavar='in-file', help='File to recover')
    parser.add_argument('out_file', nargs='?', metavar='out-file', help='File to write')
    parser.add_argument(
        'chunk_size',
        nargs='?',
        metavar='chunk-size',
        help='Bytes per read, K/M/G suffixes allowed (default: 1000000)',
    )
    parser.add_argument(
        'start_offset', nargs='?', metavar='start-offset', help='Input offset to start at'
    )
    parser.add_argument(
        'end_offset',
        nargs='?',
        metavar='end-offset',
        help='Do nothing if start-offset is not before this offset (0: no bound)',
    )
    parser.add_argument(
        '--version', action='version', version=f'%(prog)s {readbadflash.__version__}'
    )

    args = parser.parse_args(argv)

    if args.out_file is None:
        parser.print_usage(sys.stdout)
        sys.exit(0)

    chunk_size = _parse_arg(parser, args.chunk_size, '[chunk-size]')
    start_offset = _parse_arg(parser, args.start_offset, '[start-offset]')
    end_offset = _parse_arg(parser, args.end_offset, '[end-offset]')

    try:
        config = build_configuration(
            args.in_file, args.out_file, chunk_size, start_offset, end_offset
        )
    except ReadBadFlashError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    if config.no_op:
        print('nothing to do')
        return

    copier = ChunkCopier(config, policy=RecoveryPolicy())
    try:
        stats = copier.run()
    except ReadBadFlashError as e:
        print(f'Error: {e}', file=sys.stderr)
        _print_summary(copier.stats)
        sys.exit(1)
    except KeyboardInterrupt:
        print('\nInterrupted', file=sys.stderr)
        _print_summary(copier.stats)
        sys.exit(130)

    _print_summary(stats)


if __name__ == '__main__':
    main()

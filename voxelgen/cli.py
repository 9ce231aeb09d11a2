"""
Command line entry point.

    inputgeneration output.dat [object type] [n]

- object type: 1 (solid cube with spherical cavity), 2 (solid sphere),
  anything else (solid cube, the default);
- n: pixels per side of the detector; every other parameter is derived from
  it. Default values are used when it is not given.
"""
import argparse
import os
import sys
from .errors import UsageError, VoxelgenError
from .generate import generate_phantom
from .shapes import ShapeKind
from .slabs import OBJ_BUFFER

RAW_ENV = 'VOXEL_MODEL_RAW'


class ArgumentParser(argparse.ArgumentParser):
    """Parser raising UsageError instead of exiting."""

    def error(self, message):
        raise UsageError('%s\n%s' % (message, self.format_usage().strip()))


def object_code(text):
    """Object type as an integer, None when the text is not one."""
    try:
        return int(text)
    except ValueError:
        return None


def positive_int(text):
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError('%r is not a positive integer'
                                         % text)
    return value


def build_parser():
    parser = ArgumentParser(
        prog='inputgeneration',
        description='Generate a voxel phantom and store it in a binary file.')
    parser.add_argument('output', help='file to store the voxel grid in')
    parser.add_argument('object_type', nargs='?', type=object_code,
                        default=None,
                        help='1 cube with spherical cavity, 2 sphere, '
                             'otherwise cube')
    parser.add_argument('n', nargs='?', type=positive_int, default=None,
                        help='number of pixels per side of the detector')
    parser.add_argument('--raw', action='store_true',
                        help='omit the header (not valid projector input)')
    parser.add_argument('--workers', type=positive_int, default=None,
                        help='threads filling each slab')
    parser.add_argument('--slab-height', type=positive_int,
                        default=OBJ_BUFFER,
                        help='y layers computed per slab')
    parser.add_argument('--show', action='store_true',
                        help='print progress')
    return parser


def main(argv=None):
    """Run the generator, return the process exit code."""
    try:
        args = build_parser().parse_args(argv)
        raw = args.raw or os.environ.get(RAW_ENV, '').lower() == 'yes'
        report = generate_phantom(args.output,
                                  ShapeKind.from_code(args.object_type),
                                  n=args.n,
                                  raw=raw,
                                  slab_height=args.slab_height,
                                  workers=args.workers,
                                  show=args.show)
    except VoxelgenError as err:
        print(err, file=sys.stderr)
        return err.exit_code
    print('\n'.join(report.summary()))
    return 0


if __name__ == '__main__':
    sys.exit(main())

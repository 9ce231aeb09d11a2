"""
Binary output of a voxel phantom.

File layout::

    header  16 x int32, native byte order (omitted in raw mode)
    body    n_voxel[X] * n_voxel[Y] * n_voxel[Z] x float64, native byte order

The body is a stack of horizontal slices, bottom slice first, each slice
ordered first by x and then by z.
"""
import struct
import numpy as np
from .errors import BodyWriteError, HeaderWriteError, OutputOpenError

HEADER_FORMAT = '=16i'
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)
VALUE_DTYPE = np.dtype('=f8')
VALUE_SIZE = VALUE_DTYPE.itemsize


def pack_header(config):
    """Serialize the 16 header integers."""
    return struct.pack(HEADER_FORMAT, *config.header_values())


def open_output(path):
    """Open ``path`` for binary writing, truncating an existing file."""
    try:
        return open(path, 'wb')
    except OSError as err:
        raise OutputOpenError('Unable to open file %s: %s'
                              % (path, err)) from err


class BinaryStreamWriter:
    """Append the header and the slabs to an open binary stream, in order."""

    def __init__(self, stream):
        self.stream = stream
        self.bytes_written = 0

    def _write(self, data):
        written = self.stream.write(data)
        if written is None:
            written = 0
        self.bytes_written += written
        return written

    def write_header(self, config):
        """Write the header.

        :returns: Number of bytes written.
        """
        try:
            data = pack_header(config)
        except struct.error as err:
            raise HeaderWriteError(
                'Header value does not fit in 32 bits: %s' % err) from err
        try:
            written = self._write(data)
        except OSError as err:
            raise HeaderWriteError('Unable to write on file: %s'
                                   % err) from err
        if written != len(data):
            raise HeaderWriteError('Unable to write on file: header '
                                   'truncated after %d bytes' % written)
        return written

    def write_slab(self, buffer, count=None):
        """Append ``count`` values of ``buffer`` (all when None).

        :returns: Number of bytes written.
        """
        values = np.ascontiguousarray(buffer, dtype=VALUE_DTYPE).reshape(-1)
        if count is not None:
            if count > values.size:
                raise ValueError('count %d exceeds buffer size %d'
                                 % (count, values.size))
            values = values[:count]
        expected = values.size * VALUE_SIZE
        if expected == 0:
            return 0
        try:
            written = self._write(memoryview(values).cast('B'))
        except OSError as err:
            raise BodyWriteError('Unable to write on file: %s'
                                 % err) from err
        if written != expected:
            raise BodyWriteError('Unable to write on file: wrote %d of %d '
                                 'bytes' % (written, expected))
        return written

"""Read back phantoms written by :mod:`voxelgen.writer`."""
import struct
import numpy as np
from .errors import BodyReadError, HeaderReadError
from .geometry import GridConfig
from .writer import HEADER_FORMAT, HEADER_SIZE, VALUE_DTYPE


def read_header(stream):
    """Parse the header at the current position of ``stream``."""
    data = stream.read(HEADER_SIZE)
    if len(data) != HEADER_SIZE:
        raise HeaderReadError('File too short for a header: %d bytes'
                              % len(data))
    try:
        return GridConfig.from_header(struct.unpack(HEADER_FORMAT, data))
    except ValueError as err:
        raise HeaderReadError('Inconsistent header: %s' % err) from err


def read_volume(path, config=None):
    """Load a whole phantom.

    :config: None for files with a header, otherwise the GridConfig of a
        header-less (raw) file.
    :returns: (config, volume) with volume indexed [y, z, x].
    """
    with open(path, 'rb') as stream:
        if config is None:
            config = read_header(stream)
        volume = np.fromfile(stream, dtype=VALUE_DTYPE,
                             count=config.voxel_count)
    if volume.size != config.voxel_count:
        raise BodyReadError('Expected %d voxels, found %d'
                            % (config.voxel_count, volume.size))
    return config, volume.reshape(config.shape)

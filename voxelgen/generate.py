"""
Generate a voxel phantom and stream it to a binary file.
"""
import sys
from .geometry import X, Y, Z, derive_config
from .shapes import ShapeKind, make_shape
from .slabs import OBJ_BUFFER, SlabGenerator
from .writer import VALUE_SIZE, BinaryStreamWriter, open_output


class GenerationReport:
    """Outcome of a successful run."""

    def __init__(self, path, config, shape_kind, header_length, body_length,
                 slab_count):
        self.path = path
        self.config = config
        self.shape_kind = shape_kind
        self.header_length = header_length
        self.body_length = body_length
        self.slab_count = slab_count

    @property
    def file_size(self):
        return self.header_length + self.body_length

    def summary(self):
        """Lines describing the file layout for image viewers."""
        n_voxel = self.config.n_voxel
        if sys.byteorder == 'little':
            byte_order = 'Little endian byte order'
        else:
            byte_order = 'Big endian byte order'
        return ['Output file details:',
                '\tVoxel model size: %d byte' % self.config.body_size,
                '\tImage type: %d bit real' % (VALUE_SIZE * 8),
                '\tImage width: %d pixels' % n_voxel[X],
                '\tImage height: %d pixels' % n_voxel[Z],
                '\tOffset to first image: %d bytes' % self.header_length,
                '\tNumber of images: %d' % n_voxel[Y],
                '\tGap between images: 0 bytes',
                '\t' + byte_order]


def generate_phantom(path, shape_kind=ShapeKind.CUBE, n=None, raw=False,
                     slab_height=OBJ_BUFFER, workers=None,
                     cavity_radius=None, show=False):
    """Write a phantom to ``path``.

    :shape_kind: Which phantom to generate, a ShapeKind or its code.
        Unknown codes select the cube.
    :n: Detector pixels per side, None for the default geometry.
    :raw: Omit the header. Such files are for inspection only.
    :slab_height: Maximum number of y layers held in memory.
    :workers: Threads used to fill each slab.
    :cavity_radius: Sphere or cavity radius, half the object side when None.
    :show: Print progress per slab.
    :returns: A GenerationReport.

    The slab buffer is allocated before the output file is opened. On a
    write error the truncated file is left on disk.
    """
    shape_kind = ShapeKind.from_code(shape_kind)
    if slab_height <= 0:
        raise ValueError('slab height must be positive, got %d'
                         % slab_height)
    config = derive_config(n)
    shape = make_shape(shape_kind, config, radius=cavity_radius)

    with SlabGenerator(config, shape, slab_height=slab_height,
                       workers=workers) as generator:
        with open_output(path) as stream:
            writer = BinaryStreamWriter(stream)
            header_length = 0
            if not raw:
                header_length = writer.write_header(config)
            for i_slab, slab in enumerate(generator):
                writer.write_slab(slab.data, slab.count)
                if show:
                    print('slab %d/%d: layers %d-%d' % (
                        i_slab + 1, len(generator), slab.slice_start,
                        slab.slice_start + slab.height - 1))
            body_length = writer.bytes_written - header_length

    return GenerationReport(path, config, shape_kind, header_length,
                            body_length, len(generator))

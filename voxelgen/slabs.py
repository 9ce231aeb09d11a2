"""
Slab-wise evaluation of a phantom.

Only ``slab_height`` horizontal layers of the grid are kept in memory at a
time, so peak memory is bounded by ``n_voxel[X] * n_voxel[Z] * slab_height``
values whatever the height of the grid.
"""
import os
from concurrent.futures import ThreadPoolExecutor
import numpy as np
from .errors import AllocationError
from .geometry import X, Y, Z

OBJ_BUFFER = 100


def slab_bounds(n_layers, slab_height=OBJ_BUFFER):
    """Return (slice_start, height) of every slab, bottom first."""
    if slab_height <= 0:
        raise ValueError('slab height must be positive')
    return [(start, min(slab_height, n_layers - start))
            for start in range(0, n_layers, slab_height)]


class VoxelSlab:
    """Reusable buffer holding a few consecutive layers of the grid.

    The buffer is indexed [y, z, x] so that its flattened contents follow
    the file order: x fastest, then z, then y.
    """

    def __init__(self, n_x, n_z, slab_height=OBJ_BUFFER):
        try:
            self.buffer = np.empty((slab_height, n_z, n_x), dtype=np.float64)
        except (MemoryError, ValueError) as err:
            raise AllocationError(
                'Unable to allocate a slab of %d x %d x %d voxels: %s'
                % (n_x, n_z, slab_height, err)) from err
        self.slice_start = 0
        self.height = 0
        self.generation = 0
        self.ready = False

    @property
    def capacity(self):
        return self.buffer.shape[0]

    @property
    def count(self):
        """Number of valid values."""
        return self.height * self.buffer.shape[1] * self.buffer.shape[2]

    @property
    def data(self):
        """The valid layers; only readable once the slab is filled."""
        if not self.ready:
            raise RuntimeError('slab %d is being filled' % self.generation)
        return self.buffer[:self.height]

    def begin(self, slice_start, height):
        """Start a new fill; the previous contents become invalid."""
        if not 0 <= height <= self.capacity:
            raise ValueError('slab height %d exceeds capacity %d'
                             % (height, self.capacity))
        self.ready = False
        self.slice_start = slice_start
        self.height = height
        self.generation += 1

    def finish(self):
        self.ready = True


class SlabGenerator:
    """Evaluate a shape slab by slab into a single reusable buffer.

    Iterating yields the same :class:`VoxelSlab` once per slab, in ascending
    y order. The slab is refilled only when the next one is requested, so the
    consumer may read ``slab.data`` freely in between.
    """

    def __init__(self, config, shape, slab_height=OBJ_BUFFER, workers=None):
        """Allocate the buffer.

        :config: GridConfig of the phantom.
        :shape: Density function, see :mod:`voxelgen.shapes`.
        :slab_height: Maximum number of y layers per slab.
        :workers: Threads filling the layers of a slab, all CPUs when None.
        """
        self.config = config
        self.shape = shape
        self.slab_height = slab_height
        if workers is None:
            workers = os.cpu_count() or 1
        self.workers = max(1, workers)

        self.slab = VoxelSlab(config.n_voxel[X], config.n_voxel[Z],
                              slab_height)
        self.bounds = slab_bounds(config.n_voxel[Y], slab_height)

        # index grids shared by every layer
        self._x_index = np.arange(config.n_voxel[X])[np.newaxis, :]
        self._z_index = np.arange(config.n_voxel[Z])[:, np.newaxis]

        self._executor = None
        if self.workers > 1:
            self._executor = ThreadPoolExecutor(max_workers=self.workers)

    def __len__(self):
        return len(self.bounds)

    def _fill_layer(self, layer, y_index):
        self.slab.buffer[layer] = self.shape(self._x_index, y_index,
                                             self._z_index)

    def fill(self, slice_start, height):
        """Evaluate ``height`` layers starting at ``slice_start``."""
        self.slab.begin(slice_start, height)
        layers = range(height)
        if self._executor is None or height == 1:
            for layer in layers:
                self._fill_layer(layer, slice_start + layer)
        else:
            futures = [self._executor.submit(self._fill_layer, layer,
                                             slice_start + layer)
                       for layer in layers]
            # barrier: every layer written before the slab is handed out
            for future in futures:
                future.result()
        self.slab.finish()
        return self.slab

    def __iter__(self):
        for slice_start, height in self.bounds:
            yield self.fill(slice_start, height)

    def close(self):
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

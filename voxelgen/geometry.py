"""
Grid geometry of the voxel phantom.

All lengths are integers in the same (arbitrary) unit. The default values
describe a 1000 x 1000 x 1000 voxel grid scanned by a detector with 2352
pixels per side; passing ``n`` to :func:`derive_config` rescales the object
and the scan distances to a detector with ``n`` pixels per side while keeping
the voxel and pixel sizes fixed.
"""
from dataclasses import dataclass

X, Y, Z = 0, 1, 2

PIXEL_DIM = 85
ANGULAR_TRAJECTORY = 90
POSITIONS_ANGULAR_DISTANCE = 15
OBJECT_SIDE_LENGTH = 100000
DETECTOR_SIDE_LENGTH = 200000
DISTANCE_OBJECT_DETECTOR = 150000
DISTANCE_OBJECT_SOURCE = 600000
VOXEL_X_DIM = 100
VOXEL_Y_DIM = 100
VOXEL_Z_DIM = 100

N_PIXEL_ALONG_SIDE = DETECTOR_SIDE_LENGTH // PIXEL_DIM
DEFAULT_WORK_SIZE = N_PIXEL_ALONG_SIDE


def voxel_counts(object_side_length, voxel_dim):
    """Number of voxels along each axis, truncated."""
    return tuple(object_side_length // dim for dim in voxel_dim)


def plane_counts(n_voxel):
    """Number of boundary planes along each axis."""
    return tuple(count + 1 for count in n_voxel)


@dataclass(frozen=True)
class GridConfig:
    """Scan and grid parameters written in the file header."""

    pixel_dim: int
    angular_trajectory: int
    positions_angular_distance: int
    object_side_length: int
    detector_side_length: int
    distance_object_detector: int
    distance_object_source: int
    voxel_dim: tuple
    n_voxel: tuple
    n_planes: tuple

    def __post_init__(self):
        for name in ('voxel_dim', 'n_voxel', 'n_planes'):
            value = tuple(int(v) for v in getattr(self, name))
            if len(value) != 3:
                raise ValueError('%s needs three components' % name)
            object.__setattr__(self, name, value)
        if min(self.voxel_dim) <= 0:
            raise ValueError('voxel dimensions must be positive')
        if self.n_voxel != voxel_counts(self.object_side_length,
                                        self.voxel_dim):
            raise ValueError('n_voxel %s does not match object side length '
                             '%d and voxel size %s' % (
                                 self.n_voxel, self.object_side_length,
                                 self.voxel_dim))
        if self.n_planes != plane_counts(self.n_voxel):
            raise ValueError('n_planes %s does not match n_voxel %s' % (
                self.n_planes, self.n_voxel))

    def header_values(self):
        """The 16 header integers, in file order."""
        return (self.pixel_dim,
                self.angular_trajectory,
                self.positions_angular_distance,
                self.object_side_length,
                self.detector_side_length,
                self.distance_object_detector,
                self.distance_object_source) \
            + self.voxel_dim + self.n_voxel + self.n_planes

    @classmethod
    def from_header(cls, values):
        """Rebuild a configuration from the 16 header integers."""
        values = [int(value) for value in values]
        if len(values) != 16:
            raise ValueError('expected 16 header values, got %d'
                             % len(values))
        return cls(*values[:7],
                   voxel_dim=tuple(values[7:10]),
                   n_voxel=tuple(values[10:13]),
                   n_planes=tuple(values[13:16]))

    @property
    def shape(self):
        """Shape of the body array: (y, z, x), x varying fastest."""
        return (self.n_voxel[Y], self.n_voxel[Z], self.n_voxel[X])

    @property
    def slice_size(self):
        """Number of values in one horizontal slice."""
        return self.n_voxel[X] * self.n_voxel[Z]

    @property
    def voxel_count(self):
        return self.slice_size * self.n_voxel[Y]

    @property
    def body_size(self):
        """Size of the body in bytes (float64 values)."""
        return 8 * self.voxel_count


def derive_config(n=None, pixel_dim=PIXEL_DIM,
                  angular_trajectory=ANGULAR_TRAJECTORY,
                  positions_angular_distance=POSITIONS_ANGULAR_DISTANCE,
                  voxel_dim=(VOXEL_X_DIM, VOXEL_Y_DIM, VOXEL_Z_DIM)):
    """Compute the grid configuration.

    :n: Detector pixels per side. When None the default object is used,
        otherwise object side length and scan distances are derived from it.
    :returns: A GridConfig.

    Ratios that do not divide evenly are truncated, never rounded.
    """
    voxel_dim = tuple(voxel_dim)
    object_side_length = OBJECT_SIDE_LENGTH
    detector_side_length = DETECTOR_SIDE_LENGTH
    distance_object_detector = DISTANCE_OBJECT_DETECTOR
    distance_object_source = DISTANCE_OBJECT_SOURCE

    if n is not None:
        if isinstance(n, bool) or int(n) != n or n <= 0:
            raise ValueError('n must be a positive integer, got %r' % (n,))
        n = int(n)
        object_side_length = int(
            n * voxel_dim[X]
            * (OBJECT_SIDE_LENGTH / (VOXEL_X_DIM * N_PIXEL_ALONG_SIDE)))
        detector_side_length = n * pixel_dim
        distance_object_detector = int(1.5 * object_side_length)
        distance_object_source = 6 * object_side_length

    n_voxel = voxel_counts(object_side_length, voxel_dim)
    return GridConfig(pixel_dim,
                      angular_trajectory,
                      positions_angular_distance,
                      object_side_length,
                      detector_side_length,
                      distance_object_detector,
                      distance_object_source,
                      voxel_dim=voxel_dim,
                      n_voxel=n_voxel,
                      n_planes=plane_counts(n_voxel))

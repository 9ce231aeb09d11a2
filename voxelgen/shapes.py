"""
Density functions of the built-in phantoms.

Every shape maps voxel indices to a density of 0.0 or 1.0. Indices may be
plain integers or numpy arrays that broadcast together, so a whole layer can
be evaluated at once:

    >>> shape = Sphere(config)
    >>> layer = shape(np.arange(nx)[np.newaxis, :], y, np.arange(nz)[:, np.newaxis])
"""
import enum
import numpy as np
from .geometry import X, Y, Z


class ShapeKind(enum.IntEnum):
    """Built-in phantom families, numbered as on the command line."""

    CUBE_WITH_SPHERICAL_CAVITY = 1
    SPHERE = 2
    CUBE = 3

    @classmethod
    def from_code(cls, code):
        """Map an object type code; unknown or missing codes mean a cube."""
        if code == cls.CUBE_WITH_SPHERICAL_CAVITY:
            return cls.CUBE_WITH_SPHERICAL_CAVITY
        if code == cls.SPHERE:
            return cls.SPHERE
        return cls.CUBE


class Shape:
    """Base class holding the grid configuration."""

    kind = None

    def __init__(self, config):
        self.config = config

    def inside(self, x_index, y_index, z_index):
        """True where the indices lie inside the voxel grid."""
        n_voxel = self.config.n_voxel
        x_index, y_index, z_index = np.broadcast_arrays(x_index, y_index,
                                                        z_index)
        return ((x_index >= 0) & (x_index < n_voxel[X])
                & (y_index >= 0) & (y_index < n_voxel[Y])
                & (z_index >= 0) & (z_index < n_voxel[Z]))

    def center_distance(self, x_index, y_index, z_index):
        """Distance of the voxel centres from the centre of the object."""
        half_side = self.config.object_side_length / 2
        voxel_dim = self.config.voxel_dim
        x_center = (np.asarray(x_index) + 0.5) * voxel_dim[X] - half_side
        y_center = (np.asarray(y_index) + 0.5) * voxel_dim[Y] - half_side
        z_center = (np.asarray(z_index) + 0.5) * voxel_dim[Z] - half_side
        return np.sqrt(x_center ** 2 + y_center ** 2 + z_center ** 2)

    def _mask(self, x_index, y_index, z_index):
        raise NotImplementedError

    def __call__(self, x_index, y_index, z_index):
        """Density at the given voxel indices."""
        mask = self._mask(x_index, y_index, z_index)
        return np.where(mask, 1.0, 0.0)[()]


class Cube(Shape):
    """Solid block filling the whole grid."""

    kind = ShapeKind.CUBE

    def _mask(self, x_index, y_index, z_index):
        return self.inside(x_index, y_index, z_index)


class Sphere(Shape):
    """Solid sphere centred in the grid, boundary included."""

    kind = ShapeKind.SPHERE

    def __init__(self, config, radius=None):
        super().__init__(config)
        if radius is None:
            radius = config.object_side_length / 2
        self.radius = radius

    def _mask(self, x_index, y_index, z_index):
        return (self.inside(x_index, y_index, z_index)
                & (self.center_distance(x_index, y_index, z_index)
                   <= self.radius))


class CubeWithSphericalCavity(Sphere):
    """Solid cube with a centred spherical void.

    With the same radius it is the exact complement of :class:`Sphere`
    inside the grid.
    """

    kind = ShapeKind.CUBE_WITH_SPHERICAL_CAVITY

    def _mask(self, x_index, y_index, z_index):
        return (self.inside(x_index, y_index, z_index)
                & (self.center_distance(x_index, y_index, z_index)
                   > self.radius))


SHAPES = {
    ShapeKind.CUBE: Cube,
    ShapeKind.SPHERE: Sphere,
    ShapeKind.CUBE_WITH_SPHERICAL_CAVITY: CubeWithSphericalCavity,
}


def make_shape(kind, config, radius=None):
    """Create the density function for ``kind``.

    :radius: Sphere or cavity radius, half the object side when None.
        Ignored for the plain cube.
    """
    shape_class = SHAPES[ShapeKind(kind)]
    if shape_class is Cube:
        return Cube(config)
    return shape_class(config, radius=radius)

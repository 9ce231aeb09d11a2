"""Voxel phantom generation for tomographic projection."""
from .errors import (VoxelgenError, UsageError, OutputOpenError,
                     HeaderWriteError, BodyWriteError, AllocationError,
                     HeaderReadError, BodyReadError)
from .geometry import GridConfig, derive_config
from .shapes import (ShapeKind, Cube, Sphere, CubeWithSphericalCavity,
                     make_shape)
from .slabs import OBJ_BUFFER, SlabGenerator, VoxelSlab, slab_bounds
from .writer import BinaryStreamWriter, open_output
from .reader import read_header, read_volume
from .generate import GenerationReport, generate_phantom

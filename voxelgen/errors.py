"""Exceptions raised while generating a voxel phantom."""


class VoxelgenError(Exception):
    """Base class, carries the process exit code."""

    exit_code = 1


class UsageError(VoxelgenError):
    """Malformed command line."""

    exit_code = 1


class OutputOpenError(VoxelgenError):
    """Destination file cannot be opened for writing."""

    exit_code = 2


class HeaderWriteError(VoxelgenError):
    """Header could not be written completely."""

    exit_code = 3


class BodyWriteError(VoxelgenError):
    """A slab could not be written completely."""

    exit_code = 4


class AllocationError(VoxelgenError):
    """Slab buffer could not be allocated."""

    exit_code = 5


class HeaderReadError(VoxelgenError):
    """File too short to contain a header."""

    exit_code = 6


class BodyReadError(VoxelgenError):
    """File too short to contain the announced voxel grid."""

    exit_code = 6

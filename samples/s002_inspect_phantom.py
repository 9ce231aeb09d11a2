"""
Inspect a phantom written by s001_create_phantom.py.
"""
import os
import matplotlib.pyplot as plt
from voxelgen import read_volume
from voxelgen.util import save_slice, show_slice


def main():
    """Show and store the central slices."""
    path = os.path.join('phantoms', 'sphere.dat')
    if not os.path.isfile(path):
        print("Run s001_create_phantom.py to generate a phantom!")
        return

    config, volume = read_volume(path)
    print('Grid', config.n_voxel, 'voxel size', config.voxel_dim)
    print('Filled fraction %.3f' % volume.mean())

    save_slice(os.path.join('phantoms', 'sphere_y.png'), volume, axis=0)
    save_slice(os.path.join('phantoms', 'sphere_z.png'), volume, axis=1)
    show_slice(volume, axis=0)
    plt.show()


if __name__ == '__main__':
    main()

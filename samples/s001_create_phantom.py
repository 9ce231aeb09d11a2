"""
Create a sphere phantom for a detector with 200 pixels per side.
"""
import os
from voxelgen import ShapeKind, generate_phantom


def main(n_pixels=200):
    """Write the phantom and print its layout."""
    os.makedirs('phantoms', exist_ok=True)
    report = generate_phantom(os.path.join('phantoms', 'sphere.dat'),
                              ShapeKind.SPHERE, n=n_pixels, show=True)
    print('\n'.join(report.summary()))


if __name__ == '__main__':
    main()

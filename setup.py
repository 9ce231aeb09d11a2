"""Package configuration for the voxelgen module."""

from setuptools import setup, find_packages

setup(name='voxelgen',
      version='1.0',
      description='Voxel phantom generator for cone beam projection',
      packages=find_packages(exclude=['tests', 'samples']),
      install_requires=[
          'numpy', 'matplotlib', 'imageio',
      ],
      extras_require={
          'test': ['pytest'],
      },
      entry_points={
          'console_scripts': ['inputgeneration=voxelgen.cli:main'],
      },
      zip_safe=False)

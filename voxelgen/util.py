"""Utility functions for inspecting phantoms."""
import numpy as np
import matplotlib.pyplot as plt
import imageio


def middle_slice(volume, axis=0):
    """Return the central slice of a volume along ``axis``."""
    return np.take(volume, volume.shape[axis] // 2, axis=axis)


def show_slice(volume, axis=0, cmap='gray'):
    """Plot the central slice of a volume."""
    image = middle_slice(volume, axis)
    figure = plt.figure()
    plot_axis = figure.add_subplot(111)
    plot_axis.imshow(image, vmin=0, vmax=max(image.max(), 1), cmap=cmap)
    plot_axis.set_title('slice %d along axis %d'
                        % (volume.shape[axis] // 2, axis))
    return figure


def save_slice(path, volume, axis=0):
    """Store the central slice of a volume as an 8 bit image."""
    image = middle_slice(volume, axis)
    peak = image.max()
    if peak > 0:
        image = image / peak
    imageio.imwrite(path, (255 * image).astype(np.uint8))
    return path

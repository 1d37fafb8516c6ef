"""
Height and normal maps derived from a synthesized ocean spectrum.

The inverse transform of the synthesized spectrum is not the transform of a
real function, so the height of a cell is the magnitude of the complex signal
rather than its real part. Heights are therefore never negative.
"""

import logging
import time as walltime
from dataclasses import dataclass

import numpy as np

from ocean_utilities.dft import Direction, get_transform_engine
from ocean_utilities.ocean_params import GradientMode

logger = logging.getLogger(__name__)


@dataclass
class OceanMaps:
    """Result of one synthesis, owned by the caller.

    Attributes:
        height: float32 ``(Ny, Nx)`` height field
        normal: float32 ``(Ny, Nx, 3)`` unit normals remapped to ``[0, 1]``
        min_value, max_value: range of ``height``, used by the height map export
        params: the :class:`SpectrumParameters` that produced the maps
        mode: the :class:`GradientMode` used for the normals
    """

    height: np.ndarray
    normal: np.ndarray
    min_value: float
    max_value: float
    params: object = None
    mode: GradientMode = GradientMode.FINITE_DIFFERENCE

    @property
    def shape(self):
        return self.height.shape


def height_from_signal(signal):
    return np.abs(signal)


def finite_difference_gradient(height, Lx, Ly):
    """Central differences with periodic wraparound, returns ``(dh/dx, dh/dy)``."""
    ny, nx = height.shape
    grad_x = (np.roll(height, -1, axis=1) - np.roll(height, 1, axis=1)) / (2 * Lx / nx)
    grad_y = (np.roll(height, -1, axis=0) - np.roll(height, 1, axis=0)) / (2 * Ly / ny)
    return grad_x, grad_y


def wrapped_wavenumbers(n, length):
    """Angular wavenumber of each DFT bin.

    Bins below ``n/2`` are positive frequencies, bins above are the negative
    ones (``2*pi*(index - n)/length``) and the Nyquist bin is zero.
    """
    index = np.arange(n)
    k = np.zeros(n)
    k[index < n / 2] = 2 * np.pi * index[index < n / 2] / length
    k[index > n / 2] = 2 * np.pi * (index[index > n / 2] - n) / length
    return k


def spectral_gradient(height, Lx, Ly, engine=None):
    """Gradient of a real height field by spectral differentiation.

    Costs one forward and two inverse 2D transforms.
    """
    engine = engine or get_transform_engine()
    ny, nx = height.shape

    spectrum = engine.transform_2d(Direction.FORWARD, height.astype(np.complex128))
    spectrum /= nx * ny

    kx = wrapped_wavenumbers(nx, Lx)[np.newaxis, :]
    ky = wrapped_wavenumbers(ny, Ly)[:, np.newaxis]

    grad_x = engine.transform_2d(Direction.INVERSE, spectrum * kx * 1j).real
    grad_y = engine.transform_2d(Direction.INVERSE, spectrum * ky * 1j).real
    return grad_x, grad_y


def normals_from_gradient(grad_x, grad_y):
    """Unit normals of the tangent frame ``(1, 0, dh/dx) x (0, 1, dh/dy)``, remapped to ``[0, 1]``."""
    tangent = np.stack([np.ones_like(grad_x), np.zeros_like(grad_x), grad_x], axis=-1)
    bitangent = np.stack([np.zeros_like(grad_y), np.ones_like(grad_y), grad_y], axis=-1)
    normal = np.cross(tangent, bitangent)
    normal /= np.linalg.norm(normal, axis=-1, keepdims=True)
    return (normal + 1.0) * 0.5


def derive_surface(spectrum, params, mode=GradientMode.FINITE_DIFFERENCE, engine=None):
    """Inverse transform ``spectrum`` and build the height and normal maps.

    Args:
        spectrum: complex ``(Ny, Nx)`` grid from
            :func:`ocean_utilities.spectrum.synthesize_spectrum`
        params: the parameters the spectrum was synthesized with
        mode: gradient extraction algorithm
        engine: transform engine, defaults to :func:`get_transform_engine`

    Returns:
        OceanMaps
    """
    engine = engine or get_transform_engine()
    mode = GradientMode(mode)
    start_time = walltime.time()

    signal = engine.transform_2d(Direction.INVERSE, spectrum)
    height = height_from_signal(signal)

    if mode is GradientMode.SPECTRAL:
        grad_x, grad_y = spectral_gradient(height, params.Lx, params.Ly, engine)
    else:
        grad_x, grad_y = finite_difference_gradient(height, params.Lx, params.Ly)

    normal = normals_from_gradient(grad_x, grad_y)

    height = height.astype(np.float32)
    maps = OceanMaps(
        height=height,
        normal=normal.astype(np.float32),
        min_value=float(height.min()),
        max_value=float(height.max()),
        params=params,
        mode=mode,
    )
    logger.debug("Derived %s surface with %s engine in %.4f s (height range [%g, %g])",
                 mode.value, engine.name, walltime.time() - start_time, maps.min_value, maps.max_value)
    return maps

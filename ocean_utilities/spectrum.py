"""
Phillips spectrum synthesis of a time-evolved ocean height spectrum.

Follows Tessendorf, "Simulating Ocean Water": every wavevector of the grid gets
two complex Gaussian amplitudes weighted by the Phillips spectrum, and the
dispersion relation of deep water gravity waves rotates them in time.
"""

import logging
import time as walltime

import numpy as np

from ocean_utilities.ocean_params import ensure_valid

logger = logging.getLogger(__name__)

GRAVITY = 9.81  # m/s^2
ONE_OVER_SQRT_2 = 0.7071067811865475


def wavenumbers(params):
    """Wavevector components ``(kx, ky)`` of every cell, each shaped ``(Ny, Nx)``.

    Cell ``(x, y)`` maps to ``k = (2*pi*x/Lx, 2*pi*y/Ly)``.
    """
    kx = 2.0 * np.pi * np.arange(params.Nx) / params.Lx
    ky = 2.0 * np.pi * np.arange(params.Ny) / params.Ly
    return np.meshgrid(kx, ky)


def phillips(kx, ky, Vx, Vy, A, l):
    """Phillips spectral density at wavevector ``(kx, ky)``.

    ``A`` is used as given; the synthesis divides the user amplitude by the
    patch area before calling this. The density is zero at ``k = 0`` and for a
    zero wind vector.
    """
    kx = np.asarray(kx, dtype=float)
    ky = np.asarray(ky, dtype=float)

    k_len2 = kx * kx + ky * ky
    v_len2 = Vx * Vx + Vy * Vy
    if v_len2 == 0:
        return np.zeros(np.broadcast(kx, ky).shape)

    L = v_len2 / GRAVITY

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        k_dot_v = (kx * Vx + ky * Vy) / (np.sqrt(k_len2) * np.sqrt(v_len2))
        density = (
            A
            * np.exp(-1.0 / (k_len2 * L * L))
            / (k_len2 * k_len2)
            * (k_dot_v * k_dot_v)
            * np.exp(-k_len2 * l * l)
        )

    return np.where(k_len2 == 0, 0.0, density)


def dispersion(kx, ky):
    """Deep water dispersion relation, ``omega = sqrt(g * |k|)``."""
    return np.sqrt(GRAVITY * np.hypot(kx, ky))


def draw_gaussian_pairs(seed, shape):
    """Draw the two standard complex Gaussian samples of every cell.

    The stream is consumed in row-major raster order, four draws per cell:
    real then imaginary part of the first sample, then of the second.
    """
    rng = np.random.default_rng(seed)
    draws = rng.standard_normal((*shape, 4))
    xi_a = draws[..., 0] + 1j * draws[..., 1]
    xi_b = draws[..., 2] + 1j * draws[..., 3]
    return xi_a, xi_b


def synthesize_spectrum(params):
    """Frequency domain ocean height ``h(k, t)`` as a complex ``(Ny, Nx)`` grid.

    Identical parameters, seed included, give bit-identical output.

    Raises:
        InvalidOceanParameters: if ``params`` do not pass validation
    """
    ensure_valid(params)
    start_time = walltime.time()

    kx, ky = wavenumbers(params)
    # amplitude independent of the physical patch size
    amplitude = params.A / (params.Lx * params.Ly)

    xi_a, xi_b = draw_gaussian_pairs(params.seed, params.shape)

    ph_pos = phillips(kx, ky, params.Vx, params.Vy, amplitude, params.l)
    ph_neg = phillips(-kx, -ky, params.Vx, params.Vy, amplitude, params.l)

    h0a = ONE_OVER_SQRT_2 * np.sqrt(ph_pos) * xi_a
    h0b = np.conj(ONE_OVER_SQRT_2 * np.sqrt(ph_neg) * xi_b)

    phase = dispersion(kx, ky) * params.t
    spectrum = h0a * np.exp(1j * phase) + h0b * np.exp(-1j * phase)

    logger.debug("Synthesized %dx%d spectrum (seed %d, t=%g) in %.4f s",
                 params.Nx, params.Ny, params.seed, params.t, walltime.time() - start_time)
    return spectrum

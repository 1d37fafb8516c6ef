"""Ocean synthesis parameters, gradient modes and parameter validation."""

import dataclasses
import logging
import numbers
from dataclasses import dataclass
from enum import Enum, IntFlag

import numpy as np

from ocean_utilities.dft import is_power_of_2

logger = logging.getLogger(__name__)

SEED_MASK = 0xFFFFFFFF


class GradientMode(Enum):
    """How the height field gradient is extracted for the normal map."""

    FINITE_DIFFERENCE = "finite_difference"
    # spectral differentiation, three extra 2D transforms
    SPECTRAL = "spectral"


class OceanParamError(IntFlag):
    """Independent validation flags; an empty flag set means the parameters are usable."""

    INVALID_GRID_SIZE = 1
    INVALID_OCEAN_SIZE = 2
    INVALID_WIND_VELOCITY = 4


ERROR_MESSAGES = {
    OceanParamError.INVALID_GRID_SIZE: "invalid grid size",
    OceanParamError.INVALID_OCEAN_SIZE: "invalid ocean size",
    OceanParamError.INVALID_WIND_VELOCITY: "invalid wind velocity",
}


@dataclass(frozen=True)
class SpectrumParameters:
    """Inputs of one ocean synthesis.

    Attributes:
        Nx, Ny: grid resolution, each a power of two greater than 1
        Lx, Ly: physical extent of the simulated patch in meters
        Vx, Vy: wind velocity in m/s, not both zero
        A: amplitude scale of the Phillips spectrum
        l: small wavelength cutoff in meters
        t: simulation time in seconds
        seed: 32-bit seed of the Gaussian random draws
    """

    Nx: int = 32
    Ny: int = 32
    Lx: float = 1000.0
    Ly: float = 1000.0
    Vx: float = 31.0
    Vy: float = 0.0
    A: float = 10.0
    l: float = 1.0  # noqa: E741
    t: float = 0.0
    seed: int = 0

    def __post_init__(self):
        object.__setattr__(self, "seed", int(self.seed) & SEED_MASK)

    @classmethod
    def default(cls):
        """Start-up parameters of the ocean tool."""
        return cls()

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)

    def reseeded(self, seed=None):
        """Copy of these parameters with a new seed (random when ``seed`` is None)."""
        if seed is None:
            seed = new_seed()
        return self.replace(seed=seed)

    @property
    def shape(self):
        """Array shape of every grid produced for these parameters, ``(Ny, Nx)``."""
        return (self.Ny, self.Nx)


def new_seed(rng=None):
    """Draw a fresh 32-bit seed.

    Args:
        rng: numpy ``Generator`` to draw from; a new unseeded one when None

    Returns:
        int in ``[0, 2**32 - 1]``
    """
    rng = rng or np.random.default_rng()
    return int(rng.integers(0, SEED_MASK, endpoint=True))


def _valid_grid_size(n):
    return isinstance(n, numbers.Integral) and n > 1 and is_power_of_2(n)


def validate_params(params):
    """Check ``params`` before any synthesis is attempted.

    Grid sizes must be integral powers of two greater than one, the patch
    extents positive and the wind vector non-zero. Each failed rule sets its
    own flag.

    Args:
        params: :class:`SpectrumParameters` to check

    Returns:
        OceanParamError: union of the failed rules, empty (falsy) when valid
    """
    errors = OceanParamError(0)

    if not (_valid_grid_size(params.Nx) and _valid_grid_size(params.Ny)):
        errors |= OceanParamError.INVALID_GRID_SIZE

    if params.Lx <= 0 or params.Ly <= 0:
        errors |= OceanParamError.INVALID_OCEAN_SIZE

    if params.Vx == 0 and params.Vy == 0:
        errors |= OceanParamError.INVALID_WIND_VELOCITY

    return errors


def describe_errors(errors):
    """User facing messages for each flag set in ``errors``, in flag order."""
    return [message for flag, message in ERROR_MESSAGES.items() if flag in errors]


class InvalidOceanParameters(ValueError):
    """Raised when synthesis is requested for parameters that fail validation."""

    def __init__(self, errors):
        self.errors = OceanParamError(errors)
        super().__init__(", ".join(describe_errors(self.errors)))


def ensure_valid(params):
    """Return ``params`` unchanged if they validate, raise otherwise.

    Raises:
        InvalidOceanParameters: carrying the flags of :func:`validate_params`
    """
    errors = validate_params(params)
    if errors:
        logger.warning("Rejected ocean parameters %s: %s", params, ", ".join(describe_errors(errors)))
        raise InvalidOceanParameters(errors)
    return params

"""
End to end ocean generation.

:func:`generate_ocean` runs the whole pipeline for one parameter set:
validation, spectrum synthesis, inverse transform and surface derivation.
:class:`OceanGenerator` keeps the current and pending parameters of an
interactive session and only replaces its maps when the pending parameters
validate.
"""

import logging
import time as walltime

from ocean_utilities.dft import get_transform_engine
from ocean_utilities.ocean_params import (
    GradientMode,
    InvalidOceanParameters,
    OceanParamError,
    SpectrumParameters,
)
from ocean_utilities.spectrum import synthesize_spectrum
from ocean_utilities.surface import derive_surface

logger = logging.getLogger(__name__)


def generate_ocean(params, mode=GradientMode.FINITE_DIFFERENCE, engine=None):
    """Synthesize height and normal maps for ``params``.

    Every intermediate grid is allocated for this call only.

    Raises:
        InvalidOceanParameters: if ``params`` fail validation, raised by the
            synthesis step before anything is computed
    """
    engine = engine or get_transform_engine()

    start_time = walltime.time()
    spectrum = synthesize_spectrum(params)
    maps = derive_surface(spectrum, params, mode=mode, engine=engine)
    logger.debug("Generated %dx%d ocean in %.4f s", params.Nx, params.Ny, walltime.time() - start_time)
    return maps


class OceanGenerator:
    """Interactive generation state: edited parameters, last result and errors.

    Example:
        generator = OceanGenerator()
        generator.pending_params = generator.pending_params.replace(t=2.5)
        maps = generator.regenerate()
        if maps is None:
            print(describe_errors(generator.param_errors))
    """

    def __init__(self, params=None, mode=GradientMode.FINITE_DIFFERENCE, vectorized=None):
        self.params = params or SpectrumParameters.default()
        self.pending_params = self.params
        self.mode = GradientMode(mode)
        self.engine = get_transform_engine(vectorized)
        self.param_errors = OceanParamError(0)
        self.maps = None

    @property
    def accurate_normal_map(self):
        return self.mode is GradientMode.SPECTRAL

    @accurate_normal_map.setter
    def accurate_normal_map(self, value):
        self.mode = GradientMode.SPECTRAL if value else GradientMode.FINITE_DIFFERENCE

    def regenerate(self):
        """Generate from the pending parameters keeping their seed.

        Returns the new maps, or ``None`` when validation failed; the failure
        is kept in :attr:`param_errors` and the previous maps stay current.
        """
        return self._generate(self.pending_params)

    def generate_with_new_seed(self, seed=None):
        """Like :meth:`regenerate`, with a fresh seed on success."""
        return self._generate(self.pending_params, reseed=True, seed=seed)

    def _generate(self, pending, reseed=False, seed=None):
        candidate = pending.reseeded(seed) if reseed else pending
        try:
            maps = generate_ocean(candidate, mode=self.mode, engine=self.engine)
        except InvalidOceanParameters as error:
            # previous params and maps stay current
            self.param_errors = error.errors
            return None

        self.param_errors = OceanParamError(0)
        if reseed:
            self.pending_params = candidate
        self.params = candidate
        self.maps = maps
        return maps

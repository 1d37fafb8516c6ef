"""
Ocean Utilities

Procedural ocean surface synthesis from a Phillips wave spectrum:
- Radix-2 DFT/IDFT engines (scalar reference and lane-vectorized)
- Time evolved spectrum synthesis
- Height and normal map derivation (finite difference or spectral differentiation)
- TGA, image and mesh export
"""

__version__ = "1.0.0"

from ocean_utilities.dft import (
    Direction,
    ScalarTransformEngine,
    TransformEngine,
    VectorizedTransformEngine,
    get_transform_engine,
)
from ocean_utilities.ocean import OceanGenerator, generate_ocean
from ocean_utilities.ocean_params import (
    GradientMode,
    InvalidOceanParameters,
    OceanParamError,
    SpectrumParameters,
    describe_errors,
    validate_params,
)
from ocean_utilities.spectrum import synthesize_spectrum
from ocean_utilities.surface import OceanMaps, derive_surface

__all__ = [
    "Direction",
    "GradientMode",
    "InvalidOceanParameters",
    "OceanGenerator",
    "OceanMaps",
    "OceanParamError",
    "ScalarTransformEngine",
    "SpectrumParameters",
    "TransformEngine",
    "VectorizedTransformEngine",
    "derive_surface",
    "describe_errors",
    "generate_ocean",
    "get_transform_engine",
    "synthesize_spectrum",
    "validate_params",
]

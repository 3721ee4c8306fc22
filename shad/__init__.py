"""SHAD, (Spherical Harmonics with Angular Derivatives), complex spherical harmonics and their angular derivatives."""

from . import _version
__version__ = _version.__version__
del _version  # Keeps the namespace clean!


from . import config, indexing, legendre, harmonics  # noqa: F401, E402
from .config import PrecisionWarning  # noqa: F401, E402
from .harmonics import (  # noqa: F401, E402
    normalization_phase, combine, spherical_harmonics_all, SphericalHarmonics
)

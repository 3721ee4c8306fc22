"""Associated Legendre functions of the cosine of the colatitude.

This module contains the default Legendre evaluator used by
`shad.harmonics.spherical_harmonics_all`. Any other evaluator can be used
instead, as long as it has the same signature as `legendre_all`, returns the
same normalization, and stores the components in the linear scheme described
in `shad.indexing`.

Normalizations
--------------
- Complement
    The values from the recurrences, without the factor :math:`(1-x^2)^{|m|/2}`.
- Orthonormal
    Normalized so that :math:`\\int_{-1}^1 P_n^m(x)^2 dx = 1`.
- Scipy
    The unnormalized Ferrers functions with the Condon-Shortley phase, the same
    as `scipy.special.lpmv`. This is the normalization returned by `legendre_all`,
    and the one the spherical harmonics normalization factors are built for.
"""

import logging
import numpy as np
from scipy.special import gammaln
from . import indexing
from .config import precision_dtypes

logger = logging.getLogger(__name__)


def _triangular_index(order, mode):
    return order * (order + 1) // 2 + mode


def scipy_norm(orders, modes):
    """Calculate normalization factors to convert from orthonormal to the scipy format.

    Multiplying an orthonormal associated Legendre polynomial with this value
    yields results with the same scale as the scipy implementations.
    Negative modes give the factors for the scipy definition of negative modes,
    excluding the sign :math:`(-1)^m`.
    """
    orders, modes = np.asarray(orders), np.asarray(modes)
    log_ratio = gammaln(orders + np.abs(modes) + 1) - gammaln(orders - np.abs(modes) + 1)
    return (2 / (2 * orders + 1))**0.5 * np.exp(np.sign(modes) * log_ratio / 2)


def complement_legendre(max_order, x, out=None):
    """Calculate complement normalized associated Legendre polynomials for non-negative modes.

    The values are stored in a triangular scheme, where order n and mode m is
    found at index ``n * (n + 1) // 2 + m``.
    Multiply with :math:`(1 - x^2)^{m/2}` to get the orthonormal polynomials.

    Parameters
    ----------
    max_order : int
        The highest order to calculate, inclusive.
    x : array_like
        The argument of the polynomials, typically the cosine of a colatitude.
    out : ndarray, optional
        Array of shape ``((N+1)(N+2)/2,) + x.shape`` to store the values in.
    """
    x = np.asarray(x)
    one_minus_x_square = 1 - x**2
    num_unique = (max_order + 1) * (max_order + 2) // 2
    legendre = out if out is not None else np.zeros((num_unique,) + x.shape, dtype=x.dtype)

    legendre[0] = 2**-0.5
    for order in range(1, max_order + 1):
        # Recurrence to higher orders
        legendre[_triangular_index(order, order)] = - ((2 * order + 1) / (2 * order))**0.5 * legendre[_triangular_index(order - 1, order - 1)]
        # Same recurrence as below, but excluding the mode+2 part explicitly.
        legendre[_triangular_index(order, order - 1)] = - (2 * order)**0.5 * legendre[_triangular_index(order, order)] * x
        for mode in reversed(range(order - 1)):
            # Recurrence to lower modes
            legendre[_triangular_index(order, mode)] = - (
                ((order + mode + 2) * (order - mode - 1) / (order - mode) / (order + mode + 1)) ** 0.5
                * legendre[_triangular_index(order, mode + 2)] * one_minus_x_square
                + 2 * (mode + 1) / ((order + mode + 1) * (order - mode))**0.5
                * legendre[_triangular_index(order, mode + 1)] * x
            )
    return legendre


def legendre_all(max_order, colatitude, precision=None):
    r"""Calculate all associated Legendre functions of cos(colatitude) and their colatitude derivatives.

    Parameters
    ----------
    max_order : int
        The highest order to calculate, inclusive.
    colatitude : array_like
        The colatitude angles.
    precision : str, optional
        Floating point precision of the calculations, see `shad.config`.

    Returns
    -------
    values : ndarray
        :math:`P_n^m(\cos\theta)` in the scipy normalization, shape ``((N+1)^2,) + shape(colatitude)``.
    derivatives : ndarray
        :math:`\partial P_n^m(\cos\theta) / \partial\theta`, same shape as `values`.

    Note
    ----
    The derivatives are calculated with the ladder relation

    .. math:: \partial_\theta P_n^m = (P_n^{m+1} - (n+m)(n-m+1) P_n^{m-1}) / 2

    which avoids the division by :math:`\sin\theta` at the poles.
    The normalization factors are calculated in double precision for all modes.
    """
    real_dtype, _ = precision_dtypes(precision)
    colatitude = np.asarray(colatitude)
    # The sign is taken before rounding to the working precision, float32(pi) is larger than pi.
    sine = np.sin(colatitude.astype(np.promote_types(colatitude.dtype, np.float64)))
    colatitude = colatitude.astype(real_dtype)
    x = np.cos(colatitude)
    # Positive square root matches the Ferrers functions, the sign restores the derivative for sin < 0.
    x_complement = (1 - x**2)**0.5
    sine_sign = np.where(sine < 0, -1, 1).astype(real_dtype)

    orders, modes = indexing.linear(max_order)
    abs_modes = np.abs(modes)
    expand = (-1,) + (1,) * x.ndim

    complement = complement_legendre(max_order, x)
    scale = scipy_norm(orders, modes) * np.where(modes < 0, (-1.0) ** abs_modes, 1)
    values = (
        complement[_triangular_index(orders, abs_modes)]
        * x_complement ** abs_modes.astype(real_dtype).reshape(expand)
        * scale.astype(real_dtype).reshape(expand)
    )

    num = values.shape[0]
    upper = np.where((modes + 1 <= orders).reshape(expand), values[np.minimum(indexing.linear_indices(orders, modes + 1), num - 1)], 0)
    lower = np.where((modes - 1 >= -orders).reshape(expand), values[np.maximum(indexing.linear_indices(orders, modes - 1), 0)], 0)
    ladder = ((orders + modes) * (orders - modes + 1)).astype(real_dtype).reshape(expand)
    derivatives = (upper - ladder * lower) / 2 * sine_sign

    logger.debug('Evaluated %d associated Legendre functions at %d colatitudes', num, colatitude.size)
    return values.astype(real_dtype, copy=False), derivatives.astype(real_dtype, copy=False)

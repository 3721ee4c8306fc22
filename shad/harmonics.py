r"""Complex spherical harmonics and their angular derivatives.

The spherical harmonics are calculated as

.. math::

    Y_n^m(\theta, \phi) = \sqrt{\frac{2n+1}{4\pi}\frac{(n-m)!}{(n+m)!}} P_n^m(\cos\theta) e^{im\phi}

where :math:`P_n^m` are the associated Legendre functions with the Condon-Shortley phase,
see `shad.legendre`. The calculation is split in two parts.
`normalization_phase` builds the normalization magnitudes and azimuthal phases,
and `combine` merges them with the Legendre functions and their derivatives.
`spherical_harmonics_all` runs both parts and the Legendre evaluator.

All outputs are stored in the linear scheme, see `shad.indexing`, with the components
along the first axis and the shape of the angles along the remaining axes.

Precision
---------
The factorials in the normalization are never calculated directly. Instead the ratio
:math:`\sqrt{(n+m)!/(n-m)!}` is built by repeated multiplication of
:math:`\sqrt{(n+m)(n-m+1)}` for increasing m, which does not overflow.
The rounding errors of the repeated multiplications accumulate, and in single precision
the errors become significant for negative modes of high orders, up to around 5% for some
colatitudes. Single precision is only recommended up to order 10, and calculations above
the configured limit emit a `shad.config.PrecisionWarning`.
"""

import logging
import warnings
import numpy as np
from . import indexing
from .config import config, precision_dtypes, PrecisionWarning
from .legendre import legendre_all

logger = logging.getLogger(__name__)


def _validate_max_order(max_order):
    if isinstance(max_order, bool) or not isinstance(max_order, (int, np.integer)):
        raise ValueError(f'The max order has to be an integer, got {max_order!r}')
    if max_order < 0:
        raise ValueError(f'The max order cannot be negative, got {max_order}')


def normalization_magnitudes(max_order, precision=None):
    """Calculate the normalization magnitudes of all spherical harmonics up to a max order.

    The magnitudes are :math:`\\sqrt{(2n+1)/(4\\pi) (n-m)!/(n+m)!}`, built with an
    incremental recurrence over the modes of each order.
    All arithmetic uses the real dtype of the precision mode.

    Returns
    -------
    magnitudes : ndarray
        Real array of length (N+1)^2 in the linear scheme.
    """
    _validate_max_order(max_order)
    real_dtype, _ = precision_dtypes(precision)
    magnitudes = np.zeros(indexing.num_components(max_order), dtype=real_dtype)
    pi_factor = real_dtype.type(1 / (4 * np.pi))

    magnitudes[0] = np.sqrt(pi_factor)
    if max_order == 0:
        return magnitudes

    for order in range(1, max_order + 1):
        center = indexing.linear_indices(order, 0)
        prefactor = np.sqrt(real_dtype.type(2 * order + 1) * pi_factor)
        magnitudes[center] = prefactor

        # Running value of sqrt((n+m)! / (n-m)!), has to be built with increasing modes.
        ratio = real_dtype.type(1)
        for mode in range(1, order + 1):
            ratio = ratio * np.sqrt(real_dtype.type((order + mode) * (order - mode + 1)))
            magnitudes[center - mode] = prefactor * ratio
            magnitudes[center + mode] = prefactor / ratio
    return magnitudes


def normalization_phase(max_order, azimuth, precision=None):
    """Calculate the angular factors and azimuthal derivative coefficients.

    Parameters
    ----------
    max_order : int
        The maximum order to calculate, inclusive.
    azimuth : array_like
        The azimuth angles.
    precision : str, optional
        Floating point precision, see `shad.config`.

    Returns
    -------
    angular_factor : ndarray
        The normalization magnitude times :math:`e^{im\\phi}`, complex array of
        shape ``((N+1)^2,) + shape(azimuth)``.
    derivative_coefficient : ndarray
        The purely imaginary coefficients :math:`im`, complex array of shape
        ``((N+1)^2,) + (1,) * ndim(azimuth)`` so that it broadcasts with the angular factor.
    """
    _validate_max_order(max_order)
    real_dtype, complex_dtype = precision_dtypes(precision)
    azimuth = np.asarray(azimuth, dtype=real_dtype)
    expand = (-1,) + (1,) * azimuth.ndim

    magnitudes = normalization_magnitudes(max_order, precision=precision)
    _, modes = indexing.linear(max_order)
    modes = modes.astype(real_dtype).reshape(expand)

    angular_factor = (magnitudes.reshape(expand) * np.exp(1j * modes * azimuth)).astype(complex_dtype, copy=False)
    derivative_coefficient = (1j * modes).astype(complex_dtype, copy=False)
    return angular_factor, derivative_coefficient


def combine(angular_factor, derivative_coefficient, legendre_value, legendre_derivative, out=None):
    """Combine angular factors with Legendre functions to spherical harmonics and derivatives.

    Parameters
    ----------
    angular_factor, derivative_coefficient : ndarray
        Output from `normalization_phase`.
    legendre_value, legendre_derivative : ndarray
        The associated Legendre functions of cos(colatitude) and their derivatives
        with respect to the colatitude, in the linear scheme.
    out : tuple of three ndarrays, optional
        Arrays to write the results to. They are only written, never read.

    Returns
    -------
    harmonic_value, colatitude_derivative, azimuth_derivative : ndarray
        The spherical harmonics and their partial derivatives.

    Raises
    ------
    ValueError
        If the inputs do not have the same number of components, or if the
        `out` arrays cannot hold the results, by shape or by dtype.
    """
    inputs = [angular_factor, derivative_coefficient, legendre_value, legendre_derivative]
    lengths = [np.shape(arr)[0] if np.ndim(arr) > 0 else None for arr in inputs]
    if len(set(lengths)) != 1 or lengths[0] is None:
        raise ValueError(f'Cannot combine arrays with different number of components, got {lengths}')

    if out is None:
        harmonic_value = angular_factor * legendre_value
        colatitude_derivative = angular_factor * legendre_derivative
        # The azimuth derivative reuses the finished harmonic values.
        azimuth_derivative = derivative_coefficient * harmonic_value
        return harmonic_value, colatitude_derivative, azimuth_derivative

    shape = np.broadcast_shapes(*[np.shape(arr) for arr in inputs])
    if len(out) != 3:
        raise ValueError(f'Need three output arrays, got {len(out)}')
    dtype = np.result_type(*[np.asarray(arr) for arr in inputs])
    for arr in out:
        if np.shape(arr) != shape:
            raise ValueError(f'Output array of shape {np.shape(arr)} does not match result shape {shape}')
        if not np.iscomplexobj(arr) or not np.can_cast(dtype, np.asarray(arr).dtype):
            raise ValueError(f'Output array of dtype {np.asarray(arr).dtype} cannot hold results of dtype {dtype}')
    harmonic_value, colatitude_derivative, azimuth_derivative = out
    np.multiply(angular_factor, legendre_value, out=harmonic_value)
    np.multiply(angular_factor, legendre_derivative, out=colatitude_derivative)
    np.multiply(derivative_coefficient, harmonic_value, out=azimuth_derivative)
    return harmonic_value, colatitude_derivative, azimuth_derivative


def spherical_harmonics_all(max_order, colatitude, azimuth, precision=None, legendre=None, out=None):
    """Calculate all spherical harmonics up to a given max order, with angular derivatives.

    Parameters
    ----------
    max_order : int
        The maximum order to calculate, inclusive.
    colatitude : array_like
        The colatitude angles. Have to be broadcastable with azimuth.
    azimuth : array_like
        The azimuth angles. Have to be broadcastable with colatitude.
    precision : str, optional
        One of "single", "double" or "extended". Defaults to the configured precision, see `shad.config`.
    legendre : callable, optional
        Evaluator for the associated Legendre functions, called as ``legendre(max_order, colatitude)``
        and returning the values and the colatitude derivatives in the linear scheme.
        Defaults to `shad.legendre.legendre_all`.
    out : tuple of three ndarrays, optional
        Caller owned arrays to write the results to.

    Returns
    -------
    harmonic_value : ndarray
        :math:`Y_n^m(\\theta, \\phi)`, complex array of shape ``((N+1)^2,) + angles.shape``.
    colatitude_derivative : ndarray
        :math:`\\partial Y_n^m / \\partial\\theta`, same shape.
    azimuth_derivative : ndarray
        :math:`\\partial Y_n^m / \\partial\\phi = im Y_n^m`, same shape.
    """
    _validate_max_order(max_order)
    real_dtype, _ = precision_dtypes(precision)
    if real_dtype == np.float32 and max_order > config('max_reliable_single_order'):
        warnings.warn(
            f'Spherical harmonics of order {max_order} in single precision can have errors of several percent '
            f'for negative modes. Use double precision for orders above {config("max_reliable_single_order")}.',
            PrecisionWarning, stacklevel=2
        )

    # Pad the angles to the same number of dimensions, so that they broadcast behind the component axis.
    ndim = max(np.ndim(colatitude), np.ndim(azimuth))
    colatitude = np.reshape(colatitude, (1,) * (ndim - np.ndim(colatitude)) + np.shape(colatitude))
    azimuth = np.reshape(azimuth, (1,) * (ndim - np.ndim(azimuth)) + np.shape(azimuth))

    angular_factor, derivative_coefficient = normalization_phase(max_order, azimuth, precision=precision)
    if legendre is None:
        legendre_value, legendre_derivative = legendre_all(max_order, colatitude, precision=precision)
    else:
        legendre_value, legendre_derivative = legendre(max_order, colatitude)
    legendre_value, legendre_derivative = np.asarray(legendre_value), np.asarray(legendre_derivative)

    num = indexing.num_components(max_order)
    for name, arr in [('values', legendre_value), ('derivatives', legendre_derivative)]:
        if arr.ndim == 0 or arr.shape[0] != num:
            raise ValueError(
                f'Legendre evaluator returned {arr.shape[0] if arr.ndim else 0} {name} for max order {max_order}, expected {num}'
            )

    logger.debug('Combining %d spherical harmonics at angles of shape %s', num, np.broadcast_shapes(colatitude.shape, azimuth.shape))
    return combine(angular_factor, derivative_coefficient, legendre_value, legendre_derivative, out=out)


class SphericalHarmonics:
    """Stored spherical harmonics with angular derivatives.

    Parameters
    ----------
    max_order : int
        The highest order included.
    colatitude, azimuth : array_like, optional
        The angles to evaluate at.
    precision : str, optional
        Floating point precision, see `shad.config`.
    legendre : callable, optional
        Custom Legendre evaluator, see `spherical_harmonics_all`.
    defer_evaluation : bool, optional
        Do not calculate the values upon initialization of the object.
    """

    def __init__(self, max_order, colatitude=None, azimuth=None, precision=None, legendre=None, defer_evaluation=False):
        _validate_max_order(max_order)
        self._max_order = max_order
        self.precision = precision
        self._legendre = legendre
        self.colatitude = None if colatitude is None else np.asarray(colatitude)
        self.azimuth = None if azimuth is None else np.asarray(azimuth)
        self._data = None

        if not defer_evaluation:
            self.evaluate()

    def evaluate(self, colatitude=None, azimuth=None):
        """Evaluate at new angles. Angles which are not given keep their previous values."""
        if colatitude is not None:
            self.colatitude = np.asarray(colatitude)
        if azimuth is not None:
            self.azimuth = np.asarray(azimuth)
        if self.colatitude is None or self.azimuth is None:
            raise ValueError(f'{self.__class__.__name__} needs both colatitude and azimuth to evaluate')
        self._data = spherical_harmonics_all(
            self.max_order, self.colatitude, self.azimuth,
            precision=self.precision, legendre=self._legendre
        )
        return self

    @property
    def max_order(self):
        return self._max_order

    @property
    def shape(self):
        return self.values.shape[1:]

    @property
    def ndim(self):
        return len(self.shape)

    def _require_data(self):
        if self._data is None:
            raise ValueError(f'{self.__class__.__name__} has not been evaluated')
        return self._data

    @property
    def values(self):
        return self._require_data()[0]

    @property
    def colatitude_derivative(self):
        return self._require_data()[1]

    @property
    def azimuth_derivative(self):
        return self._require_data()[2]

    def _idx(self, order, mode):
        if order < 0 or order > self.max_order:
            raise IndexError(f'Order {order} is out of bounds for {self.__class__.__name__} with max order {self.max_order}')
        if abs(mode) > order:
            raise IndexError(f'Mode {mode} is out of bounds for order {order}')
        return indexing.linear_indices(order, mode)

    def __getitem__(self, key):
        order, mode = key
        return self.values[self._idx(order, mode)]

    def derivatives(self, key):
        """Get the colatitude and azimuth derivatives of the component (order, mode)."""
        order, mode = key
        idx = self._idx(order, mode)
        return self.colatitude_derivative[idx], self.azimuth_derivative[idx]

    def apply(self, expansion, derivative=None):
        """Evaluate an expansion in spherical harmonics.

        Parameters
        ----------
        expansion : array_like
            Expansion coefficients in the linear scheme. Orders above the
            max order of either the expansion or the harmonics are ignored.
        derivative : str, optional
            Set to "colatitude" or "azimuth" to evaluate the derivative of the expansion.
        """
        expansion = np.asarray(expansion)
        if expansion.ndim != 1:
            raise ValueError(f'Expansion coefficients have to be one-dimensional, got shape {expansion.shape}')
        max_order = min(self.max_order, indexing.max_order_from_components(expansion.shape[0]))
        num = indexing.num_components(max_order)

        if derivative is None:
            base = self.values
        elif 'colatitude' in derivative.lower():
            base = self.colatitude_derivative
        elif 'azimuth' in derivative.lower():
            base = self.azimuth_derivative
        else:
            raise ValueError(f'Unknown derivative option: `{derivative}`')
        return np.sum(base[:num] * expansion[:num].reshape((num,) + (1,) * self.ndim), axis=0)

    def copy(self, deep=False):
        new_obj = type(self).__new__(type(self))
        new_obj._max_order = self._max_order
        new_obj.precision = self.precision
        new_obj._legendre = self._legendre
        if deep:
            new_obj.colatitude = None if self.colatitude is None else self.colatitude.copy()
            new_obj.azimuth = None if self.azimuth is None else self.azimuth.copy()
            new_obj._data = None if self._data is None else tuple(arr.copy() for arr in self._data)
        else:
            new_obj.colatitude = self.colatitude
            new_obj.azimuth = self.azimuth
            new_obj._data = self._data
        return new_obj

"""Package wide configuration options.

The options are stored at module level and read at call time by the
functions that use them. Use `config` to read or change an option::

    >>> shad.config.config('precision')
    'double'
    >>> shad.config.config('precision', 'single')

Available options
-----------------
- precision
    The floating point precision used for the normalization recurrence and the
    outputs, one of "single", "double" or "extended". Default "double".
- max_reliable_single_order
    The highest order considered reliable in single precision. Calculations
    above this order in single precision emit a `PrecisionWarning`. Default 10.
"""

import numpy as np

__default_conf = {
    'precision': 'double',  # "single", "double" or "extended"
    'max_reliable_single_order': 10,
}

__conf = __default_conf.copy()


class PrecisionWarning(UserWarning):
    """Warning for results that are known to be inaccurate at the requested precision."""


def config(name, value=None):
    if name not in __conf:
        raise ValueError('Unknown configuration option: {}'.format(name))

    if value is None:
        return __conf[name]
    __conf[name] = value


def reset():
    """Restore all options to their default values."""
    __conf.clear()
    __conf.update(__default_conf)


def precision_dtypes(precision=None):
    """Get the real and complex dtypes for a precision mode.

    Parameters
    ----------
    precision : str, optional
        One of "single", "double" or "extended". Defaults to the configured
        precision.

    Returns
    -------
    real_dtype, complex_dtype : numpy dtypes
    """
    precision = precision if precision is not None else config('precision')
    if 'single' in precision.lower():
        return np.dtype(np.float32), np.dtype(np.complex64)
    if 'double' in precision.lower():
        return np.dtype(np.float64), np.dtype(np.complex128)
    if 'extended' in precision.lower():
        return np.dtype(np.longdouble), np.dtype(np.clongdouble)
    raise ValueError('Unknown precision option: `{}`'.format(precision))

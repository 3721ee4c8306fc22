import shad.config
import numpy as np
import pytest


@pytest.fixture(autouse=True)
def restore_config():
    yield
    shad.config.reset()


def test_defaults():
    assert shad.config.config('precision') == 'double'
    assert shad.config.config('max_reliable_single_order') == 10


def test_set_option():
    shad.config.config('precision', 'single')
    assert shad.config.config('precision') == 'single'
    assert shad.config.precision_dtypes() == (np.float32, np.complex64)


def test_reset():
    shad.config.config('max_reliable_single_order', 4)
    shad.config.reset()
    assert shad.config.config('max_reliable_single_order') == 10


def test_unknown_option():
    with pytest.raises(ValueError):
        shad.config.config('normalization', 'orthonormal')
    with pytest.raises(ValueError):
        shad.config.config('normalization')


@pytest.mark.parametrize('precision, real, complex_', [
    ('single', np.float32, np.complex64),
    ('double', np.float64, np.complex128),
    ('extended', np.longdouble, np.clongdouble),
    ('Double', np.float64, np.complex128),
])
def test_precision_dtypes(precision, real, complex_):
    real_dtype, complex_dtype = shad.config.precision_dtypes(precision)
    assert real_dtype == real
    assert complex_dtype == complex_


def test_unknown_precision():
    with pytest.raises(ValueError):
        shad.config.precision_dtypes('quadruple')


def test_reliable_order_option():
    shad.config.config('max_reliable_single_order', 3)
    with pytest.warns(shad.config.PrecisionWarning):
        shad.harmonics.spherical_harmonics_all(4, 0.5, 0.5, precision='single')

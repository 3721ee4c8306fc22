import shad
import shad.indexing
import numpy as np
import pytest

max_order = 6
colatitude = np.random.uniform(low=0, high=np.pi, size=(5, 1))
azimuth = np.random.uniform(low=0, high=2 * np.pi, size=7)


@pytest.fixture
def harmonics():
    return shad.SphericalHarmonics(max_order, colatitude=colatitude, azimuth=azimuth)


def test_stored_values(harmonics):
    value, colatitude_derivative, azimuth_derivative = shad.spherical_harmonics_all(max_order, colatitude, azimuth)
    assert harmonics.shape == (5, 7)
    assert harmonics.ndim == 2
    assert harmonics.max_order == max_order
    np.testing.assert_allclose(harmonics.values, value)
    np.testing.assert_allclose(harmonics.colatitude_derivative, colatitude_derivative)
    np.testing.assert_allclose(harmonics.azimuth_derivative, azimuth_derivative)


def test_getitem(harmonics):
    for n in range(max_order + 1):
        for m in range(-n, n + 1):
            idx = shad.indexing.linear_indices(n, m)
            np.testing.assert_allclose(harmonics[n, m], harmonics.values[idx], err_msg=f'Failed item access at (n, m) = ({n}, {m})')
            dtheta, dphi = harmonics.derivatives((n, m))
            np.testing.assert_allclose(dtheta, harmonics.colatitude_derivative[idx])
            np.testing.assert_allclose(dphi, harmonics.azimuth_derivative[idx])


@pytest.mark.parametrize('key', [(-1, 0), (max_order + 1, 0), (2, 3), (2, -3)])
def test_getitem_out_of_bounds(harmonics, key):
    with pytest.raises(IndexError):
        harmonics[key]


@pytest.mark.parametrize('expansion_order', [2, max_order, max_order + 3])
def test_apply(harmonics, expansion_order):
    expansion = np.random.normal(size=(expansion_order + 1)**2) + 1j * np.random.normal(size=(expansion_order + 1)**2)
    manual = 0
    for n in range(min(max_order, expansion_order) + 1):
        for m in range(-n, n + 1):
            manual = manual + harmonics[n, m] * expansion[shad.indexing.linear_indices(n, m)]
    np.testing.assert_allclose(harmonics.apply(expansion), manual)


def test_apply_derivatives(harmonics):
    expansion = np.random.normal(size=(max_order + 1)**2)
    np.testing.assert_allclose(
        harmonics.apply(expansion, derivative='colatitude'),
        np.sum(harmonics.colatitude_derivative * expansion[:, None, None], axis=0)
    )
    np.testing.assert_allclose(
        harmonics.apply(expansion, derivative='azimuth'),
        np.sum(harmonics.azimuth_derivative * expansion[:, None, None], axis=0)
    )
    with pytest.raises(ValueError):
        harmonics.apply(expansion, derivative='radius')


def test_apply_invalid_expansion(harmonics):
    with pytest.raises(ValueError):
        harmonics.apply(np.zeros(10))
    with pytest.raises(ValueError):
        harmonics.apply(np.zeros((49, 2)))


def test_partial_evaluation(harmonics):
    new_azimuth = np.random.uniform(low=0, high=2 * np.pi, size=7)
    harmonics.evaluate(azimuth=new_azimuth)
    value, _, _ = shad.spherical_harmonics_all(max_order, colatitude, new_azimuth)
    np.testing.assert_allclose(harmonics.values, value)


def test_deferred_evaluation():
    deferred = shad.SphericalHarmonics(max_order, defer_evaluation=True)
    with pytest.raises(ValueError):
        deferred.values
    with pytest.raises(ValueError):
        deferred.evaluate(colatitude=colatitude)
    deferred.evaluate(azimuth=azimuth)
    value, _, _ = shad.spherical_harmonics_all(max_order, colatitude, azimuth)
    np.testing.assert_allclose(deferred.values, value)


def test_copy(harmonics):
    shallow = harmonics.copy()
    deep = harmonics.copy(deep=True)
    original = harmonics.values.copy()
    harmonics.values[:] = 0
    np.testing.assert_allclose(shallow.values, 0)
    np.testing.assert_allclose(deep.values, original)
    assert deep.max_order == harmonics.max_order


def test_precision():
    single = shad.SphericalHarmonics(3, colatitude=0.4, azimuth=1.1, precision='single')
    assert single.values.dtype == np.complex64
    assert single.shape == ()


def test_invalid_max_order():
    with pytest.raises(ValueError):
        shad.SphericalHarmonics(-1, colatitude=0.4, azimuth=1.1)

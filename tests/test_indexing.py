import shad.indexing
import numpy as np
import pytest


@pytest.mark.parametrize('order', [0, 1, 4, 9])
def test_scheme_display(order):
    linear = shad.indexing.show_scheme(order)
    assert linear.shape == ((order + 1)**2,)

    for n in range(order + 1):
        assert linear[n**2 + n] == (n, 0), f'Linear scheme display failed max order {order}. Expected {(n, 0)}, got {linear[n**2 + n]}'
        for m in range(1, n + 1):
            assert linear[n**2 + n + m] == (n, m), f'Linear scheme display failed max order {order}. Expected {(n, m)}, got {linear[n**2 + n + m]}'
            assert linear[n**2 + n - m] == (n, -m), f'Linear scheme display failed max order {order}. Expected {(n, -m)}, got {linear[n**2 + n - m]}'


@pytest.mark.parametrize('order', [0, 1, 2, 7, 20])
def test_linear_bijection(order):
    indices = [shad.indexing.linear_indices(n, m) for n in range(order + 1) for m in range(-n, n + 1)]
    assert sorted(indices) == list(range((order + 1)**2))
    assert shad.indexing.linear_indices(0, 0) == 0
    # Counting from one, the first component is at index one.
    assert shad.indexing.linear_indices(0, 0) + 1 == 1


@pytest.mark.parametrize('order', [0, 1, 5, 12])
def test_linear_inverse(order):
    n, m = shad.indexing.linear(order)
    assert len(n) == shad.indexing.num_components(order)
    np.testing.assert_array_equal(shad.indexing.linear_indices(n, m), np.arange((order + 1)**2))
    assert np.all(np.abs(m) <= n)


def test_linear_indices_arrays():
    n = np.array([0, 1, 1, 1, 3])
    m = np.array([0, -1, 0, 1, -3])
    np.testing.assert_array_equal(shad.indexing.linear_indices(n, m), [0, 1, 2, 3, 9])


def test_num_components():
    assert shad.indexing.num_components(0) == 1
    assert shad.indexing.num_components(3) == 16
    with pytest.raises(ValueError):
        shad.indexing.num_components(-1)


@pytest.mark.parametrize('order', [0, 1, 6])
def test_max_order_from_components(order):
    assert shad.indexing.max_order_from_components((order + 1)**2) == order


@pytest.mark.parametrize('num', [0, 2, 5, 15])
def test_max_order_from_invalid_components(num):
    with pytest.raises(ValueError):
        shad.indexing.max_order_from_components(num)

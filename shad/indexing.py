"""Small helper module to manage indexing of arrays of spherical harmonics.

The spherical harmonics have two indices, the order n and the mode m,
which does not fit with normal programming conventions.
All arrays in this package use the same "linear" scheme, where the
component (n, m) is stored at position

    n^2 + n + m

of a single dimension of length (N+1)^2. Counting from one, this is the
position n^2 + n + 1 + m, so that (0, 0) is the first component.
Every function computing or consuming components, including user supplied
Legendre evaluators, has to follow this scheme.
"""

import numpy as np


def num_components(max_order):
    """Count the number of components up to and including `max_order`."""
    if max_order < 0:
        raise ValueError(f'Cannot index spherical harmonics with negative max order {max_order}')
    return (max_order + 1)**2


def max_order_from_components(num):
    """Find the max order stored in a linear array with `num` components."""
    max_order = int(round(num ** 0.5)) - 1
    if max_order < 0 or (max_order + 1)**2 != num:
        raise ValueError(f'Cannot use {num} components as a linear array of spherical harmonics')
    return max_order


def linear_indices(n, m):
    """Find the indices of components of order n and mode m in the "linear" scheme.

    This scheme is indexed with [n^2 + n + m], i.e. the components are all stored
    in a single dimension.
    """
    return n**2 + n + m


def linear(max_order):
    """Create linear component scheme.

    Returns the orders and modes of all components, in the order they are stored,
    i.e. [idx] -> (n=floor(sqrt(idx)), m=idx - n^2 - n).
    """
    idx = np.arange(num_components(max_order))
    n = np.floor(idx**0.5).astype(int)
    m = idx - n**2 - n
    return n, m


def show_scheme(max_order):
    """Show the linear scheme.

    Creates a numpy array with tuples (n, m) to show how the components are organized.
    """
    shown = np.full(num_components(max_order), None, object)
    for idx, (n, m) in enumerate(zip(*linear(max_order))):
        shown[idx] = (int(n), int(m))
    return shown

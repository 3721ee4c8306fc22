"""Version information for the package.

The version is hardcoded here. The `hardcoded` context manager is used by
`setup.py`, which cannot import the package before it is installed.
"""

import contextlib

__version__ = '0.1.0'


@contextlib.contextmanager
def hardcoded():
    yield __version__

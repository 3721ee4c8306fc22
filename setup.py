from setuptools import setup, find_packages
import sys
import os.path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'shad'))
from _version import hardcoded  # We cannot import the _version module, but we can import from it.


with hardcoded() as version:
    setup(
        name='shad',
        version=version,
        description='Complex spherical harmonics with angular derivatives, for multipole expansions and wavefunctions',
        long_description=open('README.rst', encoding='UTF-8').read(),
        long_description_content_type='text/x-rst',
        license='MIT',
        packages=find_packages('.', include=['shad', 'shad.*']),
        python_requires='>=3.8',
        install_requires=['numpy', 'scipy'],
        tests_require=['pytest', 'pytest-cov'],
        extras_require={'test': ['pytest', 'pytest-cov']},
        include_package_data=True,
    )

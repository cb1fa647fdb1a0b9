#!/usr/bin/env python

import os

try:
    from setuptools import setup, find_packages
except ImportError:
    exit("This package requires Python version >= 3.7 and Python's setuptools")

HERE = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(HERE, 'requirements.txt')) as f:
    requirements = [line for line in f.read().splitlines() if line and not line.startswith('#')]

about = {}
with open(os.path.join(HERE, 'agus', '__version__.py')) as f:
    exec(f.read(), about)


options = dict(
    name=about['__name__'],
    version=about['__version__'],
    description=about['__description__'],
    long_description='Agus converts temperatures between Fahrenheit and Celsius by voice. '
                     'The skill is built on a small localized intent dispatcher served by bottle.',

    url=about['__url__'],
    author=about['__author__'],
    license=about['__license__'],

    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'Natural Language :: Spanish',
        "License :: OSI Approved :: MIT License",
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.7',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: Implementation :: CPython',
    ],

    packages=find_packages(exclude=['tests', 'tests.*']),
    data_files=[('locale', ['locale/en.yaml', 'locale/es.yaml'])],
    include_package_data=True,
    install_requires=requirements,
    python_requires=">=3.7",
    setup_requires=['wheel'],
    extras_require={
        'test': ['coverage', 'pytest'],
    },
    entry_points={'console_scripts': [
        'agus-manage = agus.manage:manage',
    ]},
)

setup(**options)

#!/usr/bin/env python
""" Runtime schema validation and coercion """

from setuptools import setup, find_packages

setup(
    # http://pythonhosted.org/setuptools/setuptools.html
    name='kanon',
    version='1.0.0',
    author='Kanon Authors',

    license='BSD',
    description=__doc__,
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    keywords=['validation', 'schema', 'coercion'],

    packages=find_packages(exclude=('tests', 'tests.*')),
    scripts=[],
    entry_points={},

    python_requires='>= 3.7',
    install_requires=[
    ],
    extras_require={
        'test': [
            'pytest >= 7.0',
            'hypothesis >= 6.0',
        ],
    },
    include_package_data=True,

    platforms='any',
    classifiers=[
        # https://pypi.python.org/pypi?%3Aaction=list_classifiers
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)

######################################################################
#
# File: setup.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
"""A setuptools based setup module.

See:
https://packaging.python.org/en/latest/distributing.html
"""

from setuptools import find_packages, setup

# Get the long description from the README file
with open('README.md', encoding='utf-8') as f:
    long_description = f.read()

with open('requirements.txt', encoding='utf-8') as f:
    requirements = [line for line in f.read().splitlines() if line and not line.startswith('#')]

setup(
    name='b2service',
    version='0.1.0',
    description='Bucket and file operations on Backblaze B2, with automatic authorization',
    long_description=long_description,
    long_description_content_type='text/markdown',

    # Author details
    author='Backblaze, Inc.',
    author_email='support@backblaze.com',

    # Choose your license
    license='MIT',

    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
    keywords='backblaze b2 cloud storage',
    python_requires='>=3.8',
    packages=find_packages(exclude=['contrib', 'doc', 'test*']),

    # List run-time dependencies here.  These will be installed by pip when
    # your project is installed.
    install_requires=requirements,

    # $ pip install -e .[test]
    extras_require={
        'test': ['pytest'],
        'lint': ['ruff'],
    },
)

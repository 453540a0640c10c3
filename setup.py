#!/usr/bin/env python3
"""
Setup script for xkbconv
"""

from setuptools import setup, find_packages
import os
import sys

# Import the version without importing the package dependencies
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'xkbconv'))
from __version__ import __version__

# Read README for long_description
def read_file(filename):
    with open(os.path.join(os.path.dirname(__file__), filename), encoding='utf-8') as f:
        return f.read()

setup(
    name='xkbconv',
    version=__version__,
    description='Convert XKB keyboard layouts into Linux console keymaps',
    long_description=read_file('README.md'),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'docs']),
    python_requires='>=3.9',
    install_requires=[
        'xkbcommon>=1.0',  # Compiling RMLVO names into an XKB keymap
        'python-xlib',     # Latin-1 keysym names for the console symbol table
        'evdev',           # KEY_* names of kernel keycodes in debug output
    ],
    extras_require={
        'dev': [
            'pytest>=7.0',
            'pytest-cov',
            'pytest-timeout',
        ],
    },
    entry_points={
        'console_scripts': [
            'xkbconv=xkbconv.cli:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: System Administrators',
        'Topic :: Utilities',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Operating System :: POSIX :: Linux',
        'Environment :: Console',
    ],
)

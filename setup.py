#!/usr/bin/env python

"""
 * Copyright(c) 2022 ZettaScale Technology and others
 *
 * This program and the accompanying materials are made available under the
 * terms of the Eclipse Public License v. 2.0 which is available at
 * http://www.eclipse.org/legal/epl-2.0, or the Eclipse Distribution License
 * v. 1.0 which is available at
 * http://www.eclipse.org/org/documents/edl-v10.php.
 *
 * SPDX-License-Identifier: EPL-2.0 OR BSD-3-Clause
"""

from pathlib import Path
from setuptools import setup, find_packages

this_directory = Path(__file__).resolve().parent


with open(this_directory / 'README.md', encoding='utf-8') as f:
    long_description = f.read()


setup(
    name='typelayout',
    version='0.1.0',
    description='Size and alignment of C-like atomic, struct and union types under three packing strategies',
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="EPL-2.0, BSD-3-Clause",
    platforms=["Windows", "Linux", "Mac OS-X", "Unix"],
    keywords=[
        "struct", "union", "alignment", "padding",
        "packing", "memory layout", "teaching"
    ],
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: Eclipse Public License 2.0 (EPL-2.0)",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent"
    ],
    packages=find_packages(".", include=("typelayout", "typelayout.*")),
    package_data={
        "typelayout": ["py.typed"]
    },
    entry_points={
        "console_scripts": [
            "typelayout=typelayout.tools.cli.main:cli"
        ],
    },
    python_requires='>=3.8',
    install_requires=[
        "click>=8.0",
        "rich>=12.0",
        "rich-click>=1.5"
    ],
    extras_require={
        "dev": [
            "pytest>=6.2",
            "pytest-cov",
            "pytest-mock",
            "flake8",
            "flake8-bugbear"
        ],
        "docs": [
            "Sphinx>=4.0.0",
            "sphinx-rtd-theme>=0.5.2"
        ]
    },
    zip_safe=False
)

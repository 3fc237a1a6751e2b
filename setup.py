#!/usr/bin/env python3
"""
Setup script for birdhouse-deploy.

Release pipeline for Birdhouse progressive web apps.
"""

import codecs
import os
import re
from setuptools import setup, find_packages


def read(rel_path):
    """Read file content."""
    here = os.path.abspath(os.path.dirname(__file__))
    with codecs.open(os.path.join(here, rel_path), 'r', 'utf-8') as fp:
        return fp.read()


def find_version(rel_path):
    """Extract version from __version__.py file."""
    version_content = read(rel_path)
    version_match = re.search(
        r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
        version_content,
        re.MULTILINE
    )
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


if __name__ == "__main__":
    setup(
        name="birdhouse-deploy",
        version=find_version("birdhouse_deploy/__version__.py"),
        description="Release pipeline for Birdhouse progressive web apps",
        packages=find_packages(exclude=["tests*", "docs*", "examples*", "scripts*"]),
        python_requires=">=3.8",
        install_requires=[
            "click>=8.0",
            "rich>=12.0",
            "PyYAML>=6.0",
            "packaging>=21.0",
            "aiofiles>=22.1",
            "jsonschema>=4.0",
            "paramiko>=3.0",
            "Pillow>=9.1",
            "beautifulsoup4>=4.11",
            "rjsmin>=1.2",
            "rcssmin>=1.1",
        ],
        extras_require={
            "test": [
                "pytest>=7.0",
                "pytest-asyncio>=0.21",
                "hypothesis>=6.0",
            ],
        },
        entry_points={
            "console_scripts": [
                "birdhouse=birdhouse_deploy.cli.main:main",
            ],
        },
    )

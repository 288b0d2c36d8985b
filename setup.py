"""Packaging for dirreader, the concurrent directory inventory CLI."""

import os
import re

from setuptools import find_packages, setup

HERE = os.path.dirname(__file__)


def read_requirements():
    """Return the runtime libraries the scanner and its CLI import (typer, rich)."""
    with open(os.path.join(HERE, "requirements.txt"), "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


def read_readme():
    readme_path = os.path.join(HERE, "README.md")
    if not os.path.exists(readme_path):
        return ""
    with open(readme_path, "r", encoding="utf-8") as f:
        return f.read()


def read_version():
    """Return dirreader.cli.__version__ without importing the package.

    Importing would pull in typer before install_requires is satisfied.
    """
    with open(os.path.join(HERE, "dirreader", "cli.py"), "r", encoding="utf-8") as f:
        match = re.search(r'^__version__\s*=\s*["\']([^"\']+)["\']', f.read(), re.MULTILINE)
    if match is None:
        raise RuntimeError("Unable to find __version__ in dirreader/cli.py")
    return match.group(1)


setup(
    name="dirreader",
    version=read_version(),
    description="Concurrent directory inventory with suffix filtering and content digests",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    author="dirreader Team",
    license="MIT",
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest>=7.0"],
    },
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "dirreader=dirreader.cli:app",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Filesystems",
        "Topic :: Utilities",
    ],
    keywords="directory scan inventory checksum hash file-tree",
)

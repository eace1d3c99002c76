#!/usr/bin/env python3
# =============================================================================
#  gqlstyle: setup.py
#
#  Runtime requirements live in requirements.txt; the version lives in
#  gqlstyle/__init__.py.  Both are read here so there is a single source
#  of truth for each.
#
#  Typical use:
#      pip install -e ".[dev]"
#      python -m pytest
# =============================================================================

from __future__ import annotations

import re
from pathlib import Path

from setuptools import setup, find_packages

# ---------------------------------------------------------------------------
#  Read version from the package so we have a single source of truth.
# ---------------------------------------------------------------------------
_HERE = Path(__file__).resolve().parent


def _read_version() -> str:
    """Extract the version string from gqlstyle/__init__.py."""
    init = _HERE / "gqlstyle" / "__init__.py"
    text = init.read_text(encoding="utf-8")
    match = re.search(r'^__version__(?:\s*:\s*str)?\s*=\s*"([^"]+)"', text, re.MULTILINE)
    if match:
        return match.group(1)
    return "0.0.0"


def _read_long_description() -> str:
    """Read README.md for the long description."""
    readme = _HERE / "README.md"
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


def _read_requirements() -> list[str]:
    """Read requirements.txt if it exists."""
    req_file = _HERE / "requirements.txt"
    if req_file.exists():
        lines = req_file.read_text(encoding="utf-8").splitlines()
        return [
            ln.strip()
            for ln in lines
            if ln.strip() and not ln.strip().startswith("#")
        ]
    return []


setup(
    name="gqlstyle",
    version=_read_version(),
    description=(
        "Convention linter for GraphQL schemas: naming, plurality "
        "and mutation/query shape rules over SDL documents."
    ),
    long_description=_read_long_description(),
    long_description_content_type="text/markdown",
    license="MIT",
    author="gqlstyle contributors",
    url="https://github.com/gqlstyle/gqlstyle",
    project_urls={
        "Repository": "https://github.com/gqlstyle/gqlstyle",
        "Issues": "https://github.com/gqlstyle/gqlstyle/issues",
    },
    python_requires=">=3.10",
    packages=find_packages(
        include=[
            "gqlstyle",
            "gqlstyle.*",
        ],
        exclude=[
            "tests",
            "tests.*",
        ],
    ),
    package_data={
        "gqlstyle": ["py.typed"],
    },
    install_requires=_read_requirements(),
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "ruff>=0.4",
            "mypy>=1.10",
            "black>=24.0",
            "isort>=5.13",
            "types-PyYAML>=6.0",
        ],
    },

    # setuptools creates a platform-appropriate wrapper that calls
    # gqlstyle.__main__:main
    entry_points={
        "console_scripts": [
            "gqlstyle=gqlstyle.__main__:main",
        ],
    },

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Software Development :: Quality Assurance",
        "Typing :: Typed",
    ],
    keywords=[
        "graphql",
        "schema",
        "sdl",
        "linter",
        "style-guide",
        "static-analysis",
    ],
    zip_safe=False,
)

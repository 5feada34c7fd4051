#!/usr/bin/env python
"""
snapmac: AppArmor profile management for confined snap applications
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Define required packages
required_packages = [
    "pydantic>=2.0.0",  # For configuration validation
    "pyyaml>=6.0",      # For configuration file support
    "tabulate>=0.9.0",  # For formatted table output
]

setup(
    name="snapmac",
    version="1.0.0",
    description="Load, unload and audit AppArmor profiles of confined snap applications",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=required_packages,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'snapmac=snapmac.cli:main',
        ],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX :: Linux",
        "Topic :: Security",
    ],
)

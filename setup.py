#!/usr/bin/env python3
"""
Setup script for blockconf - streaming reader for tree-structured configuration files.

This package reads XML-like configuration files into typed configuration objects
through pluggable transformers, resolving nested file imports into one result.
"""

from setuptools import setup, find_packages
import os


# Read the README file for long description
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "blockconf - streaming reader for tree-structured configuration files"


setup(
    name="blockconf",
    version="1.0.0",
    author="blockconf Development Team",
    description="Streaming reader for tree-structured configuration files with plugins and imports",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=['*.tests', '*.tests.*', 'tests*', 'docs*']),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
        "Topic :: Text Processing :: Markup :: XML",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=[
        "networkx>=3.2.1",
        "PyYAML>=6.0.1",
    ],
    extras_require={
        "dev": [
            "pytest>=8.3.4",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "blockconf-read=blockconf.cli.run_read:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords="configuration, xml, sax, plugins, imports",
)

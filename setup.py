#!/usr/bin/env python3

# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Setup configuration for the scrapeyourcity package.

This package snapshots civic-engagement project pages and provides:
- Project discovery and HTTP fetching
- HTML sanitization, canonical formatting and Markdown conversion
- Content-addressed SQLite snapshot store with observation history
"""

from setuptools import find_packages, setup

setup(
    name="scrapeyourcity",
    version="0.1.0",
    description="Change-tracked snapshots of Shape Your City Halifax project pages",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.12",
    install_requires=[
        # Scraping dependencies
        "httpx>=0.27.0",
        "beautifulsoup4>=4.12.0",
        "markdownify>=0.13.0",
        "lxml>=5.0.0",
    ],
    extras_require={
        "test": ["pytest>=8.0.0"],
    },
    entry_points={
        "console_scripts": ["scrapeyourcity=scrapeyourcity.cli:main"],
    },
    author="Development Team",
    license="MIT-0",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)

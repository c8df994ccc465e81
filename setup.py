#!/usr/bin/env python3
"""
Setup configuration for spot-sync
Copy Liked Songs and playlists between two Spotify accounts
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "aiohttp>=3.9.1,<3.14",
    "click>=8.1.7",
    "rich-click>=1.7.0",
    "pyyaml>=6.0.1",
    "tqdm>=4.66.1",
    "python-dotenv>=1.0.0",
]

setup(
    name="spot-sync",
    version="0.1.0",
    author="spot-sync Team",
    description="Copy Liked Songs and playlists from one Spotify account to another",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["spot_sync", "spot_sync.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Framework :: AsyncIO",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "pytest-asyncio>=0.21.1",
            "aioresponses>=0.7.6",
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "spot-sync=spot_sync.cli:main",
        ],
    },
    keywords="spotify playlist liked-songs sync transfer cli",
)

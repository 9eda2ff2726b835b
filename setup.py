#!/usr/bin/env python3
"""
Setup configuration for Lyrics-Resolver
Lyrics resolution for tracks known only by noisy video titles
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "click>=8.1.7",
    "pyyaml>=6.0.1",
    "requests>=2.31.0",
    "tqdm>=4.66.1",
    "colorama>=0.4.6",
    "python-dotenv>=1.0.0",
]

setup(
    name="lyrics-resolver",
    version="0.3.0",
    author="Lyrics-Resolver Team",
    description="Resolve song lyrics from noisy video titles using LRCLIB",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["lyrics_resolver", "lyrics_resolver.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    ],
    python_requires=">=3.8",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "lyrics-resolver=lyrics_resolver.main:cli",
        ],
    },
    include_package_data=True,
    package_data={
        "lyrics_resolver": ["config/*.yaml"],
    },
    keywords="lyrics lrc lrclib synced-lyrics music cli",
)

#!/usr/bin/env python3
"""
Setup configuration for the Bookmark Uploader
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="bookmark-uploader",
    version="1.0.0",
    author="",
    author_email="",
    description="Turns browser bookmark exports into tagged bookmarks ready for upload",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["bookmark_uploader", "bookmark_uploader.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Utilities",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "bookmark-uploader=bookmark_uploader.main:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)

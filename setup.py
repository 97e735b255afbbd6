#!/usr/bin/env python

"""
telemetry-sdk - metric payloads for JSON ingest APIs
====================================================

Encodes batches of count, gauge and summary metrics into gzip-compressed,
size-bounded HTTP requests.
"""

import os
from setuptools import setup, find_packages

here = os.path.abspath(os.path.dirname(__file__))


def get_file_text(file_name):
    with open(os.path.join(here, file_name)) as in_file:
        return in_file.read()


setup(
    name="telemetry-sdk",
    version="0.1.0",
    description="Metric batch encoding and request splitting for JSON ingest APIs",
    long_description=get_file_text("README.md"),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    # PEP 561
    package_data={"telemetry_sdk": ["py.typed"]},
    zip_safe=False,
    license="MIT",
    python_requires=">=3.7",
    install_requires=[
        "urllib3>=2.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: System :: Monitoring",
    ],
    options={"bdist_wheel": {"universal": "1"}},
)

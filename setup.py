"""Setup script for bliptv."""

from pathlib import Path

from setuptools import find_packages, setup

with Path("README.md").open() as file:
    long_description = file.read()

setup(
    name="bliptv",
    version="0.3.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    description="Python client for the blip.tv API: log in, upload, list, search "
    "and delete videos",
    long_description=long_description,
    long_description_content_type="text/markdown",
    install_requires=[
        "httpx~=0.28.1",
        "xmltodict~=0.14.2",
        "typing_extensions>=4.4; python_version < '3.12'",
    ],
    extras_require={
        "test": [
            "pytest~=8.3",
            "respx~=0.22.0",
            "python-dotenv~=1.0",
        ],
    },
    license="MIT",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
)

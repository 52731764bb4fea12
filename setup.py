#!/usr/bin/env python3
"""Python packaging configuration."""
import os
from pathlib import Path

from setuptools import find_packages, setup


def read_readme():
    """Read and return text of README.md."""
    pwd = os.path.abspath(os.path.dirname(__file__))
    readme_file = os.path.join(pwd, "README.md")
    with open(readme_file, "r", encoding="utf-8") as readme:
        readme_txt = readme.read()

    return readme_txt


def read_version():
    """Read and return text of VERSION."""
    return (
        Path(__file__)
        .parent.joinpath("VERSION")
        .read_text(encoding="utf-8")
        .strip()
    )


INSTALL_REQUIRES = [
    "boto3 >= 1.14.20",
    "botocore >= 1.17.20",
    "toml >= 0.10",
]

EXTRAS_REQUIRE = {
    "test": [
        "mock",
        "pytest",
        "pytest-mock",
    ],
}

setup(
    name="pyec2lib",
    version=read_version(),
    description=(
        "Python library to launch, wait for, and list AWS EC2 resources"
    ),
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    author="pyec2lib-devs",
    license="GNU General Public License v3 (GPLv3)",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    python_requires=">=3.7",
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    zip_safe=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Natural Language :: English",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Utilities",
    ],
)

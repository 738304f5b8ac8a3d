# SPDX-License-Identifier: LGPL-3.0-or-later
from setuptools import setup, find_packages

setup(
    name="winregcli",
    version="0.1.0",
    description="Windows registry access through REG.EXE",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[l.strip() for l in open("requirements.txt", encoding="utf-8") if l.strip() and not l.startswith("#")],
    extras_require={"test": ["pytest>=7.4"]},
    entry_points={"console_scripts": ["winregcli=winregcli.__main__:main"]},
)

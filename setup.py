"""Setup configuration for broadcast-probe tool."""

from setuptools import setup, find_packages

setup(
    name="broadcast-probe",
    version="0.1.0",
    description="UDP broadcast send/receive probe for LAN reachability checks",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "broadcast-probe=broadcast_probe.cli:main",
        ],
    },
)

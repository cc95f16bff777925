import sys

from setuptools import find_packages, setup

cur_ver = sys.version_info[:2]
ver_str = ".".join(map(str, cur_ver))

if cur_ver < (3, 8):
    raise RuntimeError(
        f"Python {ver_str} is unsupported. Please use Python 3.8 or newer."
    )

setup(
    name="direkcli",
    version="0.1.0",
    description="A CLI for interacting with a direktiv server via gRPC",
    packages=find_packages(include=["direkcli", "direkcli.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "direkcli=direkcli.main:main",
        ]
    },
    install_requires=[
        "click>=8.0",
        "grpcio>=1.50.0",
        "protobuf>=4.22.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)

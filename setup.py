"""
SecureFiles - Setup Script
"""
from setuptools import setup, find_packages

setup(
    name="securefiles",
    version="1.0.0",
    description="Authenticated gateway that serves files from a protected media directory",
    author="SecureFiles Developers",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "flask>=2.2",
        "python-magic>=0.4.27",
        "click>=8.0",
        "tabulate>=0.9",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "securefiles=securefiles.cli:cli",
        ],
    },
    python_requires=">=3.8",
)

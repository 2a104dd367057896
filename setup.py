"""Package setup for fritzer."""

from setuptools import setup, find_packages

setup(
    name="fritzer",
    version="0.1.0",
    description="Command-line login helper for the AVM FRITZ!Box AHA HTTP interface",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
        "urllib3>=2.0.0",
        "colorlog>=6.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fritzer=fritzer.cli:main",
        ],
    },
)

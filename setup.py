"""Setup configuration for the Kirim.Email SMTP client."""

from setuptools import setup, find_packages

setup(
    name="kirimemail-smtp",
    version="0.1.0",
    description="Python client for the Kirim.Email SMTP API",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.12",
    install_requires=[
        "requests>=2.31.0",
        "urllib3>=2.0.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
)

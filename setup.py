"""Build configuration for carafe."""
from setuptools import find_packages, setup

setup(
    name="carafe",
    version="0.1.0",
    description="Immutable HTTP message objects and uploaded file descriptors",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "werkzeug>=3.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
)

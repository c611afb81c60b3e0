# setup.py - Build the wisard package
from setuptools import setup, find_packages

setup(
    name="wisard",
    version="0.1.0",
    description="WiSARD weightless neural networks: bit encoders, counting filters, discriminators",
    packages=find_packages(include=["wisard", "wisard.*"]),
    python_requires=">=3.8",
    install_requires=["numpy>=1.17"],
    extras_require={"test": ["pytest"]},
)

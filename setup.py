from setuptools import setup, find_packages

setup(
    name="netstatsd",
    version="1.0",
    description="Client library for sending metrics to statsd over UDP",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.7",
    install_requires=[
        "baseplate>=1.0",
    ],
    extras_require={
        "test": [
            "mock",
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "netstatsd-benchmark = netstatsd.benchmark:main",
        ],
    },
)

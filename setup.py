"""Setup script for the telemetry package."""

from setuptools import find_packages, setup

setup(
    name="telemetry-worker",
    version="0.1.0",
    description="Periodic synthetic telemetry generator with MySQL, Redis and CSV sinks",
    packages=find_packages(include=["telemetry", "telemetry.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pymysql",
        "pyyaml",
        "python-dotenv",
        "redis>=4.0",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "telemetry-worker=telemetry.worker:main",
        ],
    },
)

"""
Setup script for practice-spot-scheduler.

Spaced-repetition scheduling for practice spots (regions of a musical
score). It answers three questions:

1. When is each spot next due? (SM-2 derived update with deadline pressure)
2. How urgent is it right now? (color, readiness, lateness, deadline)
3. What fits in today's session? (mode-based selection into a time budget)
"""

from setuptools import find_packages, setup

setup(
    name="practice-spot-scheduler",
    version="1.0.0",
    description="Spaced-repetition scheduler and session selector for music practice spots",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Practice Spot Scheduler contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Education",
    ],
    keywords="music practice spaced-repetition scheduling sm2",
)

'''Package setup for nalufx'''
import os
import sys
from setuptools import setup, find_packages

# Ensure we can import from the package directory
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'nalufx'))

# Import version information
try:
    from _version import (
        __version__, __title__, __description__, __author__,
        __author_email__, __url__, __license__
    )
except ImportError:
    # Fallback if _version.py is not available
    __version__ = "0.1.0"
    __title__ = "nalufx"
    __description__ = "Day-by-day cash allocation from forecasts, regime clustering and auxiliary signals"
    __author__ = "nalufx contributors"
    __author_email__ = "contact@nalufx.com"
    __url__ = "https://github.com/nalufx/nalufx"
    __license__ = "MIT"

# Read long description from README
def read_readme():
    """Read README.md for long description."""
    readme_path = os.path.join(os.path.dirname(__file__), "README.md")
    try:
        with open(readme_path, "r", encoding="utf-8") as fh:
            return fh.read()
    except FileNotFoundError:
        return __description__

setup(
    name=__title__,
    version=__version__,
    author=__author__,
    author_email=__author_email__,
    description=__description__,
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    url=__url__,
    project_urls={
        "Source Code": "https://github.com/nalufx/nalufx",
        "Bug Reports": "https://github.com/nalufx/nalufx/issues",
    },
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Financial and Insurance Industry",
        "Intended Audience :: Developers",
        "Topic :: Office/Business :: Financial :: Investment",
        "Topic :: Scientific/Engineering :: Information Analysis",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3 :: Only",
    ],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20.0",
        "pandas>=1.3.0",
        "scipy>=1.7.0",
        "scikit-learn>=1.2.0",
        "statsmodels>=0.13.0",
        "tqdm>=4.60.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=22.0.0",
            "isort>=5.10.0",
            "flake8>=4.0.0",
            "mypy>=1.0.0",
        ],
    },
    keywords=[
        "finance", "cash-allocation", "forecasting", "exponential-smoothing",
        "kmeans", "regimes", "portfolio", "time-series",
    ],
    include_package_data=True,
    zip_safe=False,
    platforms=["any"],
    license=__license__,
)

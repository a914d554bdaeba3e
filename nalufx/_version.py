"""
Version management for nalufx package.

This module provides centralized version information that can be imported
by setup.py, __init__.py, and other modules that need version data.
"""

# Version information
__version__ = "0.1.0"
__version_info__ = tuple(map(int, __version__.split(".")))

# Package metadata
__title__ = "nalufx"
__description__ = "Day-by-day cash allocation from forecasts, regime clustering and auxiliary signals"
__author__ = "nalufx contributors"
__author_email__ = "contact@nalufx.com"
__url__ = "https://github.com/nalufx/nalufx"
__license__ = "MIT"
__copyright__ = "Copyright (c) 2025 NaluFx"

# Development status
__status__ = "Alpha"  # Alpha, Beta, Production/Stable

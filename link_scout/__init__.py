# link_scout/__init__.py
"""
LinkScout package initializer.
Defines package version and exposes the scanner facade.
"""
__version__ = "0.1.0"

from link_scout.engine import Engine, ScannerError, ScanStartupError, ScanTimeoutError

__all__ = ["Engine", "ScannerError", "ScanStartupError", "ScanTimeoutError", "__version__"]

"""cpp-smells - code smell detection for C and C++ sources."""

__version__ = "0.3.1"
__author__ = "cpp-smells contributors"

from .core.exceptions import CppSmellsError

__all__ = ["CppSmellsError", "__version__"]

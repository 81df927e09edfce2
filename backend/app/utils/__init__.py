"""
Utility functions and helpers
"""
from .filenames import derive_filename

__all__ = ['derive_filename']

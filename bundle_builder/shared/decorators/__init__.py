"""
Decorators module for Bundle Builder
"""

from .timing import async_timing

__all__ = ["async_timing"]

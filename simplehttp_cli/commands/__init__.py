"""
CLI Commands
"""

from . import request

__all__ = ["request"]

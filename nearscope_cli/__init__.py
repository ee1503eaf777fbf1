"""
Command line interface for nearscope.
"""
from .main import app

__all__ = ["app"]

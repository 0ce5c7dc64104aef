"""
Routers package for Reports module
"""

from .records import build_records_router

__all__ = ["build_records_router"]

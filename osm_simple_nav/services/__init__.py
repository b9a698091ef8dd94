"""Services layer - Application orchestration.

Available services:
- NavigationService: Load, filter and export road graphs
"""

from .navigation import NavigationService

__all__ = ["NavigationService"]

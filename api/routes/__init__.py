"""API routes package"""

from . import dishes, health

__all__ = ["dishes", "health"]

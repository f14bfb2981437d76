"""Domain value objects.

Usage:
    from lectern.domain.value_objects import DeviceContext, LockoutPolicy
"""

from lectern.domain.value_objects.device_context import DeviceContext
from lectern.domain.value_objects.lockout_policy import LockoutPolicy

__all__ = ["DeviceContext", "LockoutPolicy"]

"""
Enums shared by models and schemas.
"""
from enum import Enum


class Theme(str, Enum):
    """Display theme stored in the configuration singleton."""
    LIGHT = "light"
    DARK = "dark"

"""
Envelope field naming conventions
"""
from enum import Enum


class NamingConvention(str, Enum):
    """Wire naming convention for envelope fields"""

    CAMEL = "camel"
    PASCAL = "pascal"
    SNAKE = "snake"

    def alias(self, name: str) -> str:
        """Convert a snake_case attribute name to its wire name"""
        if self is NamingConvention.SNAKE:
            return name
        parts = [p for p in name.split("_") if p]
        if not parts:
            return name
        head = parts[0] if self is NamingConvention.CAMEL else parts[0].capitalize()
        return head + "".join(p.capitalize() for p in parts[1:])

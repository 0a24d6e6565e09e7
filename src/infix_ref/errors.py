from __future__ import annotations

from typing import Any, Optional


class InfixError(Exception):
    """Compile error with the offending token and its stream position"""

    def __init__(self, message: str, token: Any = None, position: Optional[int] = None):
        self.message = message
        self.token = token
        self.position = position
        super().__init__(self._format())

    def _format(self) -> str:
        parts = [self.message]

        if self.token is not None:
            parts.append(f"near {self.token!s}")

        if self.position is not None:
            parts.append(f"at position {self.position}")

        line = getattr(self.token, "line", None)
        column = getattr(self.token, "column", None)
        if line is not None and column is not None:
            parts.append(f"(line {line}, col {column})")

        return " ".join(parts)


class UnbalancedGrouping(InfixError):
    pass


class MissingOperand(InfixError):
    pass


class DanglingOperands(InfixError):
    """More than one value left after compiling an expression."""

    def __init__(self, message: str, leftovers: tuple, token: Any = None, position: Optional[int] = None):
        self.leftovers = leftovers
        super().__init__(message, token, position)


class OperatorTableError(ValueError):
    pass

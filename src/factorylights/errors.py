from __future__ import annotations


class FactoryError(Exception):
    """Base class for every error that aborts a factory run."""

    pass


class ParseError(FactoryError, ValueError):
    """Raised when an input line does not describe a machine."""

    def __init__(self, message: str, line_no: int | None = None, line: str = ""):
        self.message = message
        self.line_no = line_no
        self.line = line
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)

    def __reduce__(self):
        return type(self), (self.message, self.line_no, self.line)


class UnsolvableMachineError(FactoryError):
    """Raised when no combination of presses reaches the target lights."""

    pass


class InconsistentSystemError(UnsolvableMachineError):
    """Elimination left a reduced row reading 0 = 1."""

    def __init__(self, row: int):
        self.row = row
        super().__init__(
            f"Inconsistent linear system (reduced row {row} is 0 = 1)."
        )

    def __reduce__(self):
        return type(self), (self.row,)


class NoButtonsError(UnsolvableMachineError):
    """The machine has no buttons but some target light is on."""

    def __init__(self):
        super().__init__("Machine has no buttons but a non-zero target state.")

    def __reduce__(self):
        return type(self), ()


class ScalabilityLimitError(FactoryError):
    """Raised before enumerating a solution space that is too large."""

    def __init__(self, nullity: int, limit: int):
        self.nullity = nullity
        self.limit = limit
        super().__init__(
            f"Nullity {nullity} exceeds max_nullity={limit} "
            f"({2 ** nullity:,} candidates)."
        )

    def __reduce__(self):
        return type(self), (self.nullity, self.limit)

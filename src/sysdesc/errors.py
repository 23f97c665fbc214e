"""Error taxonomy for system description handling."""
from typing import Optional


class SysdescError(Exception):
    """Base class for all sysdesc errors."""
    pass


class MalformedDocument(SysdescError):
    """A description or scope document could not be parsed."""
    pass


class KindMismatch(SysdescError):
    """Two scopes of different kinds were compared."""

    def __init__(self, kind_a: str, kind_b: str):
        self.kind_a = kind_a
        self.kind_b = kind_b
        super().__init__(f"Cannot compare scope '{kind_a}' with scope '{kind_b}'")


class NotFound(SysdescError):
    """Lookup of an element, scope or description failed."""
    pass


class ConfigError(SysdescError):
    """Settings file is invalid."""
    pass


class TargetUnwritable(SysdescError):
    """Export target directory cannot be written to."""

    def __init__(self, target: str, reason: Optional[str] = None):
        self.target = target
        message = f"Export target '{target}' is not writable"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ExportFailed(SysdescError):
    """One or more steps of an export failed.

    The bundle is left as far as it got; ``failures`` lists every step
    that raised together with its error.
    """

    def __init__(self, target: str, failures: list[tuple[str, Exception]]):
        self.target = target
        self.failures = failures
        details = "; ".join(f"{step}: {error}" for step, error in failures)
        super().__init__(f"Export to '{target}' failed ({len(failures)} errors): {details}")

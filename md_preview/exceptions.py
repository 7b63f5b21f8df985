"""Package-specific exception types."""

from __future__ import annotations


class RecoverableTransformError(RuntimeError):
    """Raised when a conversion pass fails.

    The converter catches this error once, at its top level, and degrades the
    result to an escaped rendering of the raw input. The failure that
    triggered it is chained as ``__cause__``.

    Args:
        stage: Name of the pass that failed.
    """

    def __init__(self, stage: str):
        self.stage = stage
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Conversion failed during the {self.stage!r} pass"

    @property
    def diagnostic(self) -> str:
        """Short, user-facing description of the failure."""
        cause = self.__cause__
        if cause is None:
            return str(self)
        return f"{self} ({type(cause).__name__}: {cause})"

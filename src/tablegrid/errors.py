from __future__ import annotations


class TableGridError(Exception):
    pass


class FieldLookupError(TableGridError, LookupError):
    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"{reason}: {key!r}")
        self.key = key
        self.reason = reason


class ValueProcessingError(TableGridError, ValueError):
    pass


class BackendError(TableGridError, RuntimeError):
    pass


class RenderPhaseError(TableGridError):
    def __init__(self, phase: str, message: str) -> None:
        super().__init__(f"{phase}: {message}")
        self.phase = phase

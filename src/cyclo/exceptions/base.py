"""Root of cyclo's exception tree."""

from typing import Any, ClassVar, Dict, Optional


class CycloError(Exception):
    """Base exception for all cyclo errors.

    ``kind`` is a short stable tag for the error family; reports and the
    JSON API use it to say why a file is missing from the tree.
    ``details`` holds the string fields that pin down what went wrong.
    """

    kind: ClassVar[str] = "error"

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        reason = self.details.get("reason")
        return f"{self.message}: {reason}" if reason else self.message

    def to_dict(self) -> Dict[str, Any]:
        """``kind``, ``message`` and the details, ready for JSON."""
        return {"kind": self.kind, "message": self.message, **self.details}

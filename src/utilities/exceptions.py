from typing import Dict, Optional


class DatabaseValidationError(Exception):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class FormValidationError(Exception):
    """Raised when an invoice form is submitted with missing or malformed fields."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Validation failed: " + ", ".join(sorted(errors)))
        self.errors = errors

from typing import Any, Dict, Optional


class AwsFacadeError(Exception):
    """Root of the errors the facade raises on its own behalf.

    Only configuration, input validation and handle construction failures
    live here. Errors returned by AWS (``botocore.exceptions.ClientError``)
    reach callers with their original type.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context = dict(context) if context else {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} (Context: {details})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"original_error={self.original_error!r}, context={self.context!r})"
        )

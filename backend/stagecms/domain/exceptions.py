from typing import Any, Dict, Optional


class StagingError(Exception):
    """
    Base class for typed staging failures.

    Adapters map these to user-facing responses by `code`,
    never by inspecting the message text.
    """

    code = "StagingError"
    status_code = 400

    def __init__(self, message: str, meta: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.meta = meta or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "message": str(self),
            "meta": self.meta,
        }


class NotFoundError(StagingError):
    code = "NotFound"
    status_code = 404


class LockedModuleError(StagingError):
    code = "LockedModule"
    status_code = 409


class RestrictedFieldError(StagingError):
    code = "RestrictedField"
    status_code = 400


class SchemaError(StagingError):
    code = "SchemaError"
    status_code = 422


class NothingToPromoteError(StagingError):
    code = "NothingToPromote"
    status_code = 409


class TransactionError(StagingError):
    code = "TransactionError"
    status_code = 500

"""Record store error taxonomy."""


class StoreError(Exception):
    """Any failure reported by the record store."""

    code = "internal"

    def __init__(self, message: str = "", code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class StoreNotConfiguredError(StoreError):
    """The store is unreachable or has no backend configured."""

    code = "not-configured"

    def __init__(self, message: str = "Record store is not configured") -> None:
        super().__init__(message)


class MissingIdentifierError(StoreError):
    """A mutation was attempted on a record with no identifier."""

    code = "missing-id"

    def __init__(self, message: str = "Missing document id") -> None:
        super().__init__(message)


class PermissionDeniedError(StoreError):
    """The store refused the write."""

    code = "permission-denied"

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message)

"""Errors raised by storage media."""


class StorageError(Exception):
    """The underlying medium could not complete a read or write."""


class StorageQuotaExceededError(StorageError):
    """A write would push the medium past its byte quota."""

    def __init__(self, key: str, required: int, quota: int) -> None:
        super().__init__(
            f"Writing {key!r} needs {required} bytes, quota is {quota} bytes"
        )
        self.key = key
        self.required = required
        self.quota = quota

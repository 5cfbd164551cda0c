"""Storage errors."""


class StorageError(Exception):
    """Base exception for storage backend errors."""

    pass


class RecordNotFoundError(StorageError):
    """The record to update or append to does not exist."""

    def __init__(self, entity: str, key: str):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")

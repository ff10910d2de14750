"""Exceptions raised by the database handlers."""


class MappingStoreError(RuntimeError):
    """The backing database failed to read or write."""


class MappingStoreInitError(MappingStoreError):
    """The database could not be opened or its schema created."""

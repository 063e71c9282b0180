"""
Domain errors raised by the estimation engine and the project store.

Routers translate them to HTTP responses; ProjectStore.load() recovers from
PersistenceCorrupt locally and never lets it escape.
"""


class InvalidInput(ValueError):
    """Room geometry or tile parameters are missing, non-numeric, non-finite or out of range."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class NotFound(LookupError):
    """An operation referenced a project or room id that does not exist."""

    def __init__(self, kind: str, item_id: str):
        super().__init__(f"{kind} not found: {item_id}")
        self.kind = kind
        self.item_id = item_id


class PersistenceCorrupt(ValueError):
    """The durable slot holds data that cannot be decoded into a store."""

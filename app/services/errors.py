class SproutError(Exception):
    """Base class for errors raised by the record-keeping core."""


class ImportValidationError(SproutError):
    """An uploaded document is not a usable snapshot. Nothing was imported."""


class RecordNotFound(SproutError):
    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.record_id = record_id

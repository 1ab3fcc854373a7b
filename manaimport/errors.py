"""
Error kinds for an import run.

Every failure during a run is fatal: components wrap the low-level
exception in one of these and let it propagate to the job, which
logs it and exits non-zero.
"""


class ImportRunError(Exception):
    """Base class for errors that abort an import run."""

    pass


class SourceFileError(ImportRunError):
    """The ManaBox export could not be opened or read."""

    pass


class MalformedRecordError(ImportRunError):
    """A CSV row does not satisfy the inventory record constraints."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class EnrichmentFailedError(ImportRunError):
    """The Scryfall collection lookup failed or returned an unusable body."""

    pass


class MergeError(ImportRunError):
    """Scryfall metadata could not be merged onto the batch."""

    pass


class PersistenceFailedError(ImportRunError):
    """A write to the card store failed."""

    pass

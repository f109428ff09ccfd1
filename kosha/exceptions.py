"""
Exceptions raised by the index, the loader and the query layer.

"Nothing found" is never an exception: searches return empty lists and
single-article lookups return None.
"""

from typing import Optional


class KoshaError(Exception):
    """Base exception for kosha errors"""


class InvalidQueryError(KoshaError, ValueError):
    """Input rejected before any storage access"""


class StorageError(KoshaError):
    """Opening the index or running a transaction failed"""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class QueryFailedError(StorageError):
    """A read query failed at the SQL level"""


class IndexNotReadyError(KoshaError):
    """The full-text indexes have not been rebuilt yet"""


class LoaderClosedError(KoshaError):
    """The bulk loader was already committed or rolled back"""


class UnknownDictionaryError(KoshaError):
    """A row referenced a dictionary code that was never inserted"""

    def __init__(self, dict_code: str):
        self.dict_code = dict_code
        super().__init__(f"Unknown dictionary code '{dict_code}'")


class SourceFormatError(KoshaError, ValueError):
    """A source dictionary file does not have the expected shape"""


class BulkLoadActiveError(StorageError):
    """A write or a second load was attempted while a bulk loader is open"""

    def __init__(self, operation: str):
        super().__init__(operation)
        self.args = (f"{operation} failed: a bulk load is still open",)


class StateUnavailableError(KoshaError):
    """A starred/history operation needs a settings store and none is configured"""

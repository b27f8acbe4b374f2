# backend/vcnty/errors.py
"""
Exceptions raised by the import service.

File problems are ValueErrors (the seller can fix them and retry),
upstream API problems are RuntimeErrors.
"""


class ImportFileError(ValueError):
    """
    Raised when an uploaded file cannot be turned into rows.
    """


def _human_size(n: int) -> str:
    for unit, size in (("MB", 1024 * 1024), ("KB", 1024)):
        if n >= size:
            return f"{round(n / size, 1):g}{unit}"
    return f"{n} bytes"


class FileTooLargeError(ImportFileError):
    def __init__(self, size: int, limit: int):
        super().__init__(f"File too large. Please upload less than {_human_size(limit)}.")
        self.size = size
        self.limit = limit


class UnsupportedFileError(ImportFileError):
    def __init__(self, filename: str):
        super().__init__("Only CSV or XLSX allowed")
        self.filename = filename


class FileReadError(ImportFileError):
    """
    Raised when pandas cannot parse the upload.
    """


class BackendAPIError(RuntimeError):
    """
    Raised for any failed call to the VCNTY API, transport errors included.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

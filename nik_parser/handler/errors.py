class NikParserError(Exception):
    """Base class for every error raised by nik_parser."""


class RegionDataError(NikParserError):
    """Region dataset is missing, unreadable or malformed."""

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.message = message
        self.path = path

class UnloaderError(Exception):
    """Base exception for all unloader-related errors."""


class AuctionNotFoundError(UnloaderError):
    """Raised when an auction cannot be found in the database."""

class BookingValidationError(ValueError):
    """Raised when a request is rejected before any state is changed."""
    pass


class SessionNotFoundError(LookupError):
    """Raised when a practice session id is unknown to the store."""
    pass


class PermissionDeniedError(PermissionError):
    """Raised when someone other than the session's coordinator tries a coordinator action."""
    pass

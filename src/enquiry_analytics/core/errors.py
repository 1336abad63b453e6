"""Domain exceptions shared by the store and the report layer."""


class ReportQueryError(Exception):
    """Raised when a report cannot be built or executed against the store.

    The message is returned verbatim to the client as a plain-text 500.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

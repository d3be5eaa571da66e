"""Exceptions raised at the public boundary of regex_unescape."""

INVALID_ARGUMENT_MESSAGE = "input argument must be a string"


class InvalidArgumentError(TypeError):
    """Raised when unescape() is handed something that is not a str."""

    def __init__(self, message: str = INVALID_ARGUMENT_MESSAGE):
        super().__init__(message)
        self.message = message

"""Exceptions raised by the influence-maximisation toolkit."""


class GraphNotBuiltError(RuntimeError):
    """Raised when an algorithm is used before a graph has been attached."""


class InvalidInputFormatError(ValueError):
    """Raised when a graph or seed file does not match the expected format."""
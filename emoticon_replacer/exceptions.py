"""
Exceptions raised by the Emoticon Replacer.
"""


class ValidationError(ValueError):
    """Raised when corpus data has the wrong shape."""

"""Exception types raised while generating a print job."""


class InvalidConfiguration(ValueError):
    """A process or shape parameter makes generation impossible.

    Raised before any command is emitted.
    """


class IOFailure(OSError):
    """The command sink could not write its buffered output."""

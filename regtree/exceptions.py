class RegTreeError(Exception):
    """Base class for errors raised while converting a CFR volume"""


class DocumentReadError(RegTreeError):
    """The input volume could not be opened or read"""

    def __init__(self, path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not read {path}: {cause}")


class DocumentDecodeError(RegTreeError):
    """The input volume is not well-formed XML"""

    def __init__(self, source: str, cause):
        self.source = source
        self.cause = cause
        super().__init__(f"Could not decode {source}: {cause}")

"""Exception types raised by the cache model and the trace reader."""


class ConfigurationError(ValueError):
    """Invalid cache geometry or policy. Raised once, at construction."""


class MalformedInputError(ValueError):
    """A trace token that cannot be turned into an unsigned address."""

    def __init__(self, token: str, lineno: int = 0, reason: str = "unparsable address"):
        self.token = token
        self.lineno = lineno
        where = f"line {lineno}: " if lineno else ""
        super().__init__(f"{where}{reason} '{token}'")


__all__ = ["ConfigurationError", "MalformedInputError"]

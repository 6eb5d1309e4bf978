class SentieroError(Exception):
    pass


class RouteConfigError(SentieroError, ValueError):
    """Raised at construction time for an identifier that cannot be compiled."""

    def __init__(self, identifier: str, reason: str):
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"invalid route {identifier!r}: {reason}")

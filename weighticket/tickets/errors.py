"""Error taxonomy for ticket generation."""


class TicketGenerationError(Exception):
    """Base class for failures raised while generating tickets."""


class ValidationError(TicketGenerationError, ValueError):
    """A request field is missing, malformed or out of range."""


class NoActiveDriversError(TicketGenerationError):
    """No driver in the request is marked active."""

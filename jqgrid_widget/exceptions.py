class JqGridError(Exception):
    pass


class InvalidParamError(JqGridError, ValueError):
    """Raised when a widget or grid request is configured with an unsupported value."""

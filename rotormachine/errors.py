class ConfigurationError(ValueError):
    """Raised when a machine, rotor or reflector is built from invalid wiring or positions."""


class InternalInvariantError(RuntimeError):
    """A mapping produced a result that validated construction should rule out."""

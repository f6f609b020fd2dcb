"""Exception types for FLAPSTER."""


class FlapsterError(Exception):
    """Base class for all FLAPSTER errors."""


class ConfigurationError(FlapsterError):
    """Initial game state could not be built from the given configuration."""

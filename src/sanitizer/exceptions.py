# src/sanitizer/exceptions.py


class SanitizerError(Exception):
    """Base class for every error raised by the sanitization engine."""


class ConfigurationError(SanitizerError):
    """A sanitization rule set cannot be applied as written."""


class ConfigurationAmbiguityError(ConfigurationError):
    """More than one applicable rule was found for a single-winner kind."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"too many matching rules of type {kind}")


class UnknownTransformKindError(ConfigurationError):
    """A dom_transform record names a transform that does not exist."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"No DOM transform named {kind}")


class InvalidSanitizationError(ConfigurationError):
    """A rule is malformed (missing fields, bad regex or bad CSS selector)."""


class InvalidRegionConfigurationError(ConfigurationError):
    """
    The 'regions' / 'output' pair cannot be used.
    Handled by the pipeline, which falls back to the 'selector' rule.
    """

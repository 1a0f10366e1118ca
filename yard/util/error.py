"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Raised when a required setting is missing or unusable."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        super().__init__(f"Invalid configuration for {setting}: {reason}")


class DependencyInjectionError(UtilError):
    """Raised when the DI container cannot be assembled."""

    pass

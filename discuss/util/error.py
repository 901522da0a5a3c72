"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Settings are unusable for the selected environment.

    Raised at container build time, before the app serves traffic.
    """

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        super().__init__(f"Invalid setting {setting}: {reason}")


class DependencyInjectionError(UtilError):
    """No provider implementation is registered for a component."""

    def __init__(self, component: str, kind: str):
        self.component = component
        self.kind = kind
        super().__init__(f"No {kind} implementation for {component}")

"""Contains exceptions raised while preparing a draft release."""


class ConfigError(Exception):
    """Raised when the release configuration document cannot be used."""

    pass


class VersionResolutionError(Exception):
    """Raised when no project version can be resolved for the requested languages."""

    def __init__(self, message: str, tried: list[str] | None = None) -> None:
        """Initializes the exception with the manifests that were inspected."""
        super().__init__(message)
        self.tried = tried or []

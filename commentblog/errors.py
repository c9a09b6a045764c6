from __future__ import annotations


class BuildError(Exception):
    """Base class for failures that abort a build."""


class ConfigError(BuildError):
    pass


class MetadataError(BuildError):
    pass


class DocumentError(BuildError):
    def __init__(self, path: object, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class RenderError(BuildError):
    pass

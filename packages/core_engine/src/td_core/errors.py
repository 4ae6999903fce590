from pathlib import Path
from typing import Optional, Union


class TdError(Exception):
    """Base class for all tabledoc errors."""


class ConfigurationError(TdError):
    """Invalid or unreadable configuration or template override."""


class ConflictError(TdError):
    """Destination already holds documents and overwriting was not forced."""


class NotFoundError(TdError, LookupError):
    """A named entity does not exist."""


class SchemaLoadError(TdError, ValueError):
    """A schema snapshot could not be parsed into a Schema."""


class RenderError(TdError):
    """Template execution failed."""


class SerializationError(TdError):
    """Structured encoding of an entity failed."""


class DocumentIOError(TdError):
    """Reading or writing a document failed for a reason other than absence."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None

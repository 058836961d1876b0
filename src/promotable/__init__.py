"""Public package entrypoint for the promotable artifacts handoff."""

from .descriptor import decode, encode, fix_prefix
from .errors import (
    ErrorCode,
    PersistenceError,
    PromoteError,
    PropertiesFormatError,
    ValidationError,
)
from .models import ArtifactDescriptor, Project, PromotableArtifacts
from .observability import StructuredLogger
from .promote import FILENAME, load_promotable, make_promotable

__all__ = [
    "ArtifactDescriptor",
    "ErrorCode",
    "FILENAME",
    "PersistenceError",
    "Project",
    "PromotableArtifacts",
    "PromoteError",
    "PropertiesFormatError",
    "StructuredLogger",
    "ValidationError",
    "decode",
    "encode",
    "fix_prefix",
    "load_promotable",
    "make_promotable",
]

"""Flat key/value encoding of artifact descriptors.

Each descriptor is written under its own key prefix so that several of them
can share one property namespace::

    artifact.groupId=com.example
    attached.0.classifier=sources

Stored file paths are relative to a base directory, which keeps the
persisted mapping valid after the build directory is relocated.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from promotable.models import ArtifactDescriptor, file_extension

PREFIX_SEPARATOR = "."


def fix_prefix(prefix: str | None) -> str:
    """Normalize *prefix* so it can be concatenated with a field name."""
    if prefix is None:
        return ""
    if prefix and not prefix.endswith(PREFIX_SEPARATOR):
        return prefix + PREFIX_SEPARATOR
    return prefix


def relativize(base: str | Path | None, path: str | Path) -> str:
    """Express *path* relative to the *base* directory.

    Paths outside *base* come back absolute and unchanged.
    """
    if base is None:
        return str(path)
    base_path = Path(base).absolute()
    file_path = Path(path).absolute()
    if not file_path.is_relative_to(base_path):
        return str(file_path)
    relative = file_path.relative_to(base_path)
    if relative == Path("."):
        return ""
    return relative.as_posix()


def resolve(base: str | Path | None, relative: str) -> Path:
    """Inverse of :func:`relativize`; absolute stored paths resolve to themselves."""
    if base is None:
        return Path(relative)
    return Path(os.path.normpath(Path(base).absolute() / relative))


def encode(
    descriptor: ArtifactDescriptor,
    prefix: str | None,
    base: str | Path | None = None,
) -> dict[str, str]:
    prefix = fix_prefix(prefix)

    output: dict[str, str] = {}
    output[prefix + "id"] = descriptor.id
    output[prefix + "groupId"] = descriptor.group_id
    output[prefix + "artifactId"] = descriptor.artifact_id
    output[prefix + "version"] = descriptor.version
    if descriptor.scope is not None:
        output[prefix + "scope"] = descriptor.scope
    output[prefix + "type"] = descriptor.type
    if descriptor.classifier is not None:
        output[prefix + "classifier"] = descriptor.classifier
    if descriptor.file is not None:
        output[prefix + "file"] = relativize(base, descriptor.file)
    output[prefix + "baseVersion"] = descriptor.base_version or ""
    return output


def decode(
    properties: Mapping[str, str] | None,
    prefix: str | None,
    base: str | Path | None = None,
) -> ArtifactDescriptor | None:
    """Rebuild the descriptor stored under *prefix*, or ``None`` if there is none.

    Only the presence of ``<prefix>id`` is checked; every other field is
    passed through as stored.
    """
    prefix = fix_prefix(prefix)

    if properties is None or prefix + "id" not in properties:
        return None

    relative_path = properties.get(prefix + "file")
    return ArtifactDescriptor(
        group_id=properties.get(prefix + "groupId", ""),
        artifact_id=properties.get(prefix + "artifactId", ""),
        version=properties.get(prefix + "version", ""),
        type=properties.get(prefix + "type", ""),
        classifier=properties.get(prefix + "classifier"),
        scope=properties.get(prefix + "scope"),
        file=None if relative_path is None else resolve(base, relative_path),
        base_version=properties.get(prefix + "baseVersion"),
        extension=file_extension(relative_path),
    )


__all__ = [
    "PREFIX_SEPARATOR",
    "decode",
    "encode",
    "file_extension",
    "fix_prefix",
    "relativize",
    "resolve",
]

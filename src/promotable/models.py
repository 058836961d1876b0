"""Typed dataclasses for artifact descriptors and build project state."""

from __future__ import annotations

import json
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import cbor2

SNAPSHOT_VERSION = "SNAPSHOT"

_TIMESTAMPED_SNAPSHOT = re.compile(r"^(.*)-(\d{8}\.\d{6})-(\d+)$")


def file_extension(path: str | Path | None) -> str:
    """Return the text after the last ``.`` of the final path segment."""
    if path is None:
        return ""
    text = str(path)
    last_sep = max(text.rfind("/"), text.rfind("\\"))
    last_dot = text.rfind(".")
    if last_dot > last_sep:
        return text[last_dot + 1 :]
    return ""


def snapshot_base_version(version: str | None) -> str | None:
    """Collapse a timestamped snapshot version to its ``-SNAPSHOT`` form."""
    if version is None:
        return None
    match = _TIMESTAMPED_SNAPSHOT.match(version)
    if match is None:
        return version
    return f"{match.group(1)}-{SNAPSHOT_VERSION}"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True, slots=True)
class ArtifactDescriptor:
    """A single build output identified by its coordinates.

    ``base_version`` and ``extension`` are derived from ``version`` and
    ``file`` when not given explicitly. A missing ``type`` is stored as ``""``.
    """

    group_id: str
    artifact_id: str
    version: str
    type: str = ""
    classifier: str | None = None
    scope: str | None = None
    file: Path | None = None
    base_version: str | None = None
    extension: str | None = None

    def __post_init__(self) -> None:
        if self.type is None:
            object.__setattr__(self, "type", "")
        if self.base_version is None:
            object.__setattr__(self, "base_version", snapshot_base_version(self.version))
        if self.extension is None:
            object.__setattr__(self, "extension", file_extension(self.file))

    @property
    def effective_type(self) -> str:
        if _is_blank(self.type):
            return self.extension or ""
        return self.type

    @property
    def versionless_key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def id(self) -> str:
        parts = [self.group_id, self.artifact_id, self.type]
        if self.classifier is not None:
            parts.append(self.classifier)
        parts.append(self.base_version or "")
        return ":".join(parts)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "group_id": self.group_id,
            "artifact_id": self.artifact_id,
            "version": self.version,
            "base_version": self.base_version,
            "type": self.effective_type,
            "extension": self.extension,
            "classifier": self.classifier,
            "scope": self.scope,
            "file": None if self.file is None else str(self.file),
        }


@dataclass(slots=True)
class Project:
    """The build state handed over by the packaging step."""

    build_directory: Path
    artifact: ArtifactDescriptor | None = None
    attached_artifacts: list[ArtifactDescriptor] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PromotableArtifacts:
    """Descriptors reconstructed from a persisted properties file."""

    artifact: ArtifactDescriptor | None = None
    attached: tuple[ArtifactDescriptor, ...] = ()

    def all(self) -> Iterator[ArtifactDescriptor]:
        if self.artifact is not None:
            yield self.artifact
        yield from self.attached

    def to_json(self, path: str | Path | None = None) -> str:
        encoded = json.dumps(self._payload(), indent=2, sort_keys=True) + "\n"
        if path is not None:
            Path(path).write_text(encoded, encoding="utf-8")
        return encoded

    def to_cbor(self, path: str | Path | None = None) -> bytes:
        encoded = cbor2.dumps(self._payload(), canonical=True)
        if path is not None:
            Path(path).write_bytes(encoded)
        return encoded

    def _payload(self) -> dict[str, object]:
        return {
            "artifact": None if self.artifact is None else self.artifact.to_dict(),
            "attached": [item.to_dict() for item in self.attached],
        }


__all__ = [
    "ArtifactDescriptor",
    "Project",
    "PromotableArtifacts",
    "file_extension",
    "snapshot_base_version",
]

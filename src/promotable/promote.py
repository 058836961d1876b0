"""Hand-over of build artifacts between the packaging and promotion steps.

The packaging step calls :func:`make_promotable`, which encodes the project's
primary artifact under ``artifact`` and each attached artifact under
``attached.<index>``, then writes the merged mapping to
``<build dir>/promotable-artifacts.properties``. The promotion step calls
:func:`load_promotable` to get equivalent descriptors back.
"""

from __future__ import annotations

from pathlib import Path

from promotable.descriptor import decode, encode
from promotable.models import ArtifactDescriptor, Project, PromotableArtifacts
from promotable.observability import StructuredLogger
from promotable.properties import read_properties, write_properties

FILENAME = "promotable-artifacts.properties"
PRIMARY_PREFIX = "artifact"
ATTACHED_PREFIX = "attached"
HEADER = "Generated by promotable"


def target_base(build_directory: str | Path) -> Path:
    """Directory that stored artifact paths are made relative to."""
    return Path(build_directory).absolute()


def promote_properties_file(build_directory: str | Path) -> Path:
    return Path(build_directory) / FILENAME


def attached_prefix(index: int) -> str:
    return f"{ATTACHED_PREFIX}.{index}"


def collect_properties(
    project: Project,
    logger: StructuredLogger | None = None,
) -> dict[str, str]:
    log = logger if logger is not None else StructuredLogger()
    base = target_base(project.build_directory)
    artifact_info: dict[str, str] = {}

    artifact = project.artifact
    if artifact is not None:
        log.info("make_promotable", f"Artifact: {artifact.id}", prefix=PRIMARY_PREFIX, artifact=artifact.id)
        artifact_properties = encode(artifact, PRIMARY_PREFIX, base)
        log.debug(
            "make_promotable",
            "Artifact properties",
            prefix=PRIMARY_PREFIX,
            artifact=artifact.id,
            extra=dict(artifact_properties),
        )
        artifact_info.update(artifact_properties)
    else:
        log.debug("make_promotable", "No main artifact found")

    for index, attached in enumerate(project.attached_artifacts):
        prefix = attached_prefix(index)
        log.info("make_promotable", f"Attached artifact: {attached.id}", prefix=prefix, artifact=attached.id)
        artifact_properties = encode(attached, prefix, base)
        log.debug(
            "make_promotable",
            "Attached artifact properties",
            prefix=prefix,
            artifact=attached.id,
            extra=dict(artifact_properties),
        )
        artifact_info.update(artifact_properties)

    return artifact_info


def make_promotable(
    project: Project,
    logger: StructuredLogger | None = None,
) -> Path:
    """Write the project's artifact descriptors next to its build output.

    Raises :class:`~promotable.errors.PersistenceError` when the file cannot
    be written.
    """
    log = logger if logger is not None else StructuredLogger()
    artifact_info = collect_properties(project, log)

    path = promote_properties_file(project.build_directory)
    log.info("write_properties", f"Writing artifact information to {path}")
    write_properties(artifact_info, path, HEADER)
    log.debug("write_properties", "Written artifact properties", extra=dict(artifact_info))
    return path


def load_promotable(
    build_directory: str | Path,
    logger: StructuredLogger | None = None,
) -> PromotableArtifacts:
    log = logger if logger is not None else StructuredLogger()
    path = promote_properties_file(build_directory)
    log.info("load_promotable", f"Reading artifact information from {path}")
    properties = read_properties(path)
    base = target_base(build_directory)

    artifact = decode(properties, PRIMARY_PREFIX, base)
    if artifact is not None:
        log.info("load_promotable", f"Artifact: {artifact.id}", prefix=PRIMARY_PREFIX, artifact=artifact.id)
    else:
        log.debug("load_promotable", "No main artifact found")

    attached: list[ArtifactDescriptor] = []
    while True:
        prefix = attached_prefix(len(attached))
        descriptor = decode(properties, prefix, base)
        if descriptor is None:
            break
        log.info("load_promotable", f"Attached artifact: {descriptor.id}", prefix=prefix, artifact=descriptor.id)
        attached.append(descriptor)

    return PromotableArtifacts(artifact=artifact, attached=tuple(attached))


__all__ = [
    "ATTACHED_PREFIX",
    "FILENAME",
    "HEADER",
    "PRIMARY_PREFIX",
    "attached_prefix",
    "collect_properties",
    "load_promotable",
    "make_promotable",
    "promote_properties_file",
    "target_base",
]

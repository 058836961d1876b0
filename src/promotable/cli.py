"""``promotable`` command-line entry point."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from promotable.errors import PromoteError, ValidationError
from promotable.models import ArtifactDescriptor, Project, PromotableArtifacts
from promotable.observability import StructuredLogger
from promotable.promote import load_promotable, make_promotable

SPEC_FORMAT = "groupId:artifactId:version[:type[:classifier]][@file]"


def parse_artifact_spec(spec: str) -> ArtifactDescriptor:
    """Parse ``groupId:artifactId:version[:type[:classifier]][@file]``."""
    coordinates, _, file_part = spec.partition("@")
    parts = coordinates.split(":")
    if not 3 <= len(parts) <= 5 or not all(parts[:3]):
        raise ValidationError(
            f"Invalid artifact `{spec}`.",
            hint=f"Expected {SPEC_FORMAT}.",
        )
    group_id, artifact_id, version = parts[:3]
    artifact_type = parts[3] if len(parts) > 3 else ""
    classifier = parts[4] if len(parts) > 4 and parts[4] else None
    return ArtifactDescriptor(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        type=artifact_type,
        classifier=classifier,
        file=Path(file_part) if file_part else None,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promotable",
        description="Record build artifacts for a later promotion step.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    make = commands.add_parser("make", help="write the promotable artifacts file")
    make.add_argument("--build-dir", required=True, type=Path)
    make.add_argument("--artifact", help=f"primary artifact, {SPEC_FORMAT}")
    make.add_argument("--attached", action="append", default=[], help="attached artifact, repeatable")
    make.add_argument("--log", type=Path, help="write structured log records as JSON lines")

    show = commands.add_parser("show", help="list artifacts recorded in a build directory")
    show.add_argument("--build-dir", required=True, type=Path)
    show.add_argument("--format", choices=("text", "json"), default="text")
    show.add_argument("--cbor", type=Path, help="also export the descriptors as CBOR")
    show.add_argument("--log", type=Path, help="write structured log records as JSON lines")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = StructuredLogger()
    try:
        if args.command == "make":
            _make(args, logger)
        else:
            _show(args, logger)
    except ValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except PromoteError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        if args.log is not None:
            logger.to_json_lines(args.log)
    return 0


def _make(args: argparse.Namespace, logger: StructuredLogger) -> None:
    project = Project(
        build_directory=args.build_dir,
        artifact=parse_artifact_spec(args.artifact) if args.artifact else None,
        attached_artifacts=[parse_artifact_spec(spec) for spec in args.attached],
    )
    print(make_promotable(project, logger))


def _show(args: argparse.Namespace, logger: StructuredLogger) -> None:
    artifacts = load_promotable(args.build_dir, logger)
    if args.cbor is not None:
        artifacts.to_cbor(args.cbor)
    if args.format == "json":
        print(artifacts.to_json(), end="")
        return
    for line in _describe(artifacts):
        print(line)


def _describe(artifacts: PromotableArtifacts) -> list[str]:
    lines = []
    for descriptor in artifacts.all():
        location = "" if descriptor.file is None else f" -> {descriptor.file}"
        lines.append(f"{descriptor.id}{location}")
    return lines


if __name__ == "__main__":
    raise SystemExit(main())

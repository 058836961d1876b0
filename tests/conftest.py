"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from promotable.models import ArtifactDescriptor, Project


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    """Provide an existing build output directory."""
    target = tmp_path / "target"
    target.mkdir()
    return target


@pytest.fixture
def project(build_dir: Path) -> Project:
    """A project with a primary jar plus sources and javadoc attachments."""
    return Project(
        build_directory=build_dir,
        artifact=ArtifactDescriptor(
            group_id="com.example",
            artifact_id="app",
            version="1.0",
            type="jar",
            file=build_dir / "app-1.0.jar",
        ),
        attached_artifacts=[
            ArtifactDescriptor(
                group_id="com.example",
                artifact_id="app",
                version="1.0",
                type="jar",
                classifier="sources",
                file=build_dir / "app-1.0-sources.jar",
            ),
            ArtifactDescriptor(
                group_id="com.example",
                artifact_id="app",
                version="1.0",
                type="jar",
                classifier="javadoc",
                file=build_dir / "app-1.0-javadoc.jar",
            ),
        ],
    )

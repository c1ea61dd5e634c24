"""Shared pytest fixtures for depembed tests."""

from __future__ import annotations

import pytest

from depembed.models import Dependency


@pytest.fixture
def make_dep(tmp_path):
    """Build a Dependency whose jar exists under tmp_path (unless with_file=False)."""

    def _make(
        artifact_id: str,
        group_id: str = "com.acme",
        version: str = "1.0.0",
        with_file: bool = True,
        **overrides,
    ) -> Dependency:
        fields = {"extension": "jar"}
        fields.update(overrides)
        if with_file and "file" not in fields:
            path = tmp_path / f"{artifact_id}-{version}.{fields['extension'] or 'jar'}"
            path.write_bytes(b"PK\x03\x04")
            fields["file"] = path
        return Dependency(group_id=group_id, artifact_id=artifact_id, version=version, **fields)

    return _make

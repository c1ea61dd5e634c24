"""Tests for build descriptor loading."""

from __future__ import annotations

import json

import pytest

from depembed.exceptions import DescriptorError
from depembed.models import Clause
from depembed.schemas import BuildDescriptor, InstructionsSchema, load_descriptor


def _write(path, payload) -> None:
    path.write_text(json.dumps(payload))


class TestInstructionsSchema:
    def test_defaults(self):
        config = InstructionsSchema().to_config()
        assert config.clauses == ()
        assert config.strip_group is True
        assert config.strip_version is False
        assert config.transitive is False
        assert config.embed_directory is None

    def test_clause_order_preserved(self):
        schema = InstructionsSchema(
            embed_dependency={"b": {"scope": "runtime"}, "a": {"inline": "true"}},
            embed_strip_version="True",
        )
        config = schema.to_config()
        assert config.clauses == (
            Clause("b", {"scope": "runtime"}),
            Clause("a", {"inline": "true"}),
        )
        assert config.strip_version is True

    def test_null_clause_attributes(self):
        schema = InstructionsSchema(embed_dependency={"widget": None})
        assert schema.to_config().clauses == (Clause("widget", {}),)

    def test_json_booleans_become_flags(self):
        schema = InstructionsSchema.model_validate(
            {
                "embed_dependency": {"helpers": {"inline": True}},
                "embed_strip_group": False,
                "embed_strip_version": True,
            }
        )
        config = schema.to_config()
        assert config.clauses == (Clause("helpers", {"inline": "true"}),)
        assert config.strip_group is False
        assert config.strip_version is True


class TestLoadDescriptor:
    def test_relative_files_resolve_against_descriptor(self, tmp_path):
        path = tmp_path / "build.json"
        _write(
            path,
            {
                "dependencies": [
                    {"group_id": " com.acme ", "artifact_id": "widget", "version": "1.2.0",
                     "file": "lib/widget-1.2.0.jar"},
                ],
            },
        )
        descriptor, deps = load_descriptor(path)

        assert isinstance(descriptor, BuildDescriptor)
        assert deps[0].group_id == "com.acme"
        assert deps[0].file == tmp_path / "lib" / "widget-1.2.0.jar"
        assert deps[0].direct is True

    def test_absolute_file_kept(self, tmp_path):
        jar = tmp_path / "abs.jar"
        path = tmp_path / "build.json"
        _write(path, {"dependencies": [
            {"group_id": "g", "artifact_id": "abs", "version": "1", "file": str(jar)},
        ]})
        _, deps = load_descriptor(path)
        assert deps[0].file == jar

    def test_existing_headers(self, tmp_path):
        path = tmp_path / "build.json"
        _write(path, {"headers": {"Bundle-ClassPath": ".,classes", "Include-Resource": None}})
        descriptor, _ = load_descriptor(path)
        headers = descriptor.existing_headers()
        assert headers.bundle_classpath == ".,classes"
        assert headers.include_resource is None

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "build.json"
        path.write_text("{not json")
        with pytest.raises(DescriptorError, match="Invalid JSON"):
            load_descriptor(path)

    def test_missing_required_field(self, tmp_path):
        path = tmp_path / "build.json"
        _write(path, {"dependencies": [{"group_id": "g", "version": "1"}]})
        with pytest.raises(DescriptorError, match="Invalid descriptor"):
            load_descriptor(path)

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(DescriptorError, match="Cannot read"):
            load_descriptor(tmp_path / "missing.json")

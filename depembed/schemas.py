"""Build descriptor schemas consumed by the command line."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from depembed.exceptions import DescriptorError
from depembed.models import (
    BUNDLE_CLASSPATH,
    INCLUDE_RESOURCE,
    Dependency,
    EmbedConfig,
    clauses_from_mapping,
    parse_flag,
)
from depembed.placement import ManifestHeaders


class DependencySchema(BaseModel):
    group_id: str
    artifact_id: str
    version: str
    selected_version: str | None = None
    scope: str | None = None
    type: str | None = None
    classifier: str | None = None
    optional: bool | None = None
    file: str | None = None
    extension: str | None = None
    direct: bool = True

    @field_validator("group_id", "artifact_id", "version", mode="before")
    @classmethod
    def _strip_whitespace(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    def to_dependency(self, base_dir: Path | None = None) -> Dependency:
        file = None
        if self.file:
            file = Path(self.file)
            if base_dir is not None and not file.is_absolute():
                file = base_dir / file
        return Dependency(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            selected_version=self.selected_version,
            scope=self.scope,
            type=self.type,
            classifier=self.classifier,
            optional=self.optional,
            file=file,
            extension=self.extension,
            direct=self.direct,
        )


class InstructionsSchema(BaseModel):
    """Embedding instructions; embed_dependency is the parsed header."""

    embed_dependency: dict[str, dict[str, str] | None] | None = None
    embed_directory: str | None = None
    embed_strip_group: str | None = "true"
    embed_strip_version: str | None = None
    embed_transitive: str | None = None

    @field_validator("embed_dependency", mode="before")
    @classmethod
    def _stringify_attributes(cls, v):
        # JSON booleans such as "inline": true become header strings
        if not isinstance(v, dict):
            return v
        return {
            pattern: (
                {k: str(a).lower() if isinstance(a, bool) else a for k, a in attrs.items()}
                if isinstance(attrs, dict)
                else attrs
            )
            for pattern, attrs in v.items()
        }

    @field_validator("embed_strip_group", "embed_strip_version", "embed_transitive", mode="before")
    @classmethod
    def _stringify_flag(cls, v):
        return str(v).lower() if isinstance(v, bool) else v

    def to_config(self) -> EmbedConfig:
        return EmbedConfig(
            clauses=tuple(clauses_from_mapping(self.embed_dependency or {})),
            embed_directory=self.embed_directory,
            strip_group=parse_flag(self.embed_strip_group),
            strip_version=parse_flag(self.embed_strip_version),
            transitive=parse_flag(self.embed_transitive),
        )


class BuildDescriptor(BaseModel):
    """A resolved build: its dependencies plus the bundle instructions."""

    dependencies: list[DependencySchema] = Field(default_factory=list)
    instructions: InstructionsSchema = Field(default_factory=InstructionsSchema)
    headers: dict[str, str | None] = Field(default_factory=dict)

    def existing_headers(self) -> ManifestHeaders:
        return ManifestHeaders(
            bundle_classpath=self.headers.get(BUNDLE_CLASSPATH),
            include_resource=self.headers.get(INCLUDE_RESOURCE),
        )


def load_descriptor(path: Path) -> tuple[BuildDescriptor, list[Dependency]]:
    """Read and validate a descriptor; relative files resolve against its folder."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DescriptorError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DescriptorError(f"Invalid JSON in {path}: {e}") from e

    try:
        descriptor = BuildDescriptor.model_validate(raw)
    except ValidationError as e:
        raise DescriptorError(f"Invalid descriptor {path}: {e}") from e

    base_dir = path.parent
    return descriptor, [d.to_dependency(base_dir) for d in descriptor.dependencies]

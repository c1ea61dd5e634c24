"""Data models for dependency embedding."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from depembed.exceptions import VersionResolutionError

# Header names read from and written to the bundle instructions.
EMBED_DEPENDENCY = "Embed-Dependency"
EMBED_DIRECTORY = "Embed-Directory"
EMBED_STRIP_GROUP = "Embed-StripGroup"
EMBED_STRIP_VERSION = "Embed-StripVersion"
EMBED_TRANSITIVE = "Embed-Transitive"
BUNDLE_CLASSPATH = "Bundle-ClassPath"
INCLUDE_RESOURCE = "Include-Resource"


def parse_flag(value: str | None) -> bool:
    """Interpret a header flag: only a case-insensitive ``true`` is true."""
    return value is not None and value.lower() == "true"


@dataclass(frozen=True)
class Dependency:
    """A resolved build dependency."""

    group_id: str
    artifact_id: str
    version: str
    selected_version: str | None = None
    scope: str | None = None
    type: str | None = None
    classifier: str | None = None
    optional: bool | None = None
    file: Path | None = None
    extension: str | None = None
    direct: bool = True

    def get_selected_version(self) -> str:
        """Return the symbolic version (e.g. ``1.0.0-SNAPSHOT``).

        Raises :class:`VersionResolutionError` when none was resolved.
        """
        if not self.selected_version:
            raise VersionResolutionError(
                f"no selected version for {self.group_id}:{self.artifact_id}"
            )
        return self.selected_version

    @property
    def coordinates(self) -> str:
        parts = [self.group_id, self.artifact_id, self.type or "jar"]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)

    def sort_key(self) -> tuple[str, str, str, str, str]:
        return (
            self.group_id,
            self.artifact_id,
            self.version,
            self.classifier or "",
            self.type or "",
        )


@dataclass(frozen=True)
class Clause:
    """One rule of the Embed-Dependency header: pattern plus attribute map."""

    pattern: str
    attributes: Mapping[str, str] = field(default_factory=dict)


def clauses_from_mapping(
    instructions: Mapping[str, Mapping[str, str] | None],
) -> list[Clause]:
    """Turn a pre-parsed ``{pattern: {attr: value}}`` header into clauses."""
    return [Clause(pattern, dict(attrs or {})) for pattern, attrs in instructions.items()]


@dataclass(frozen=True)
class EmbedConfig:
    """Embedding instructions for one resolution pass."""

    clauses: tuple[Clause, ...] = ()
    embed_directory: str | None = None
    strip_group: bool = True
    strip_version: bool = False
    transitive: bool = False

    @classmethod
    def from_properties(
        cls,
        properties: Mapping[str, str],
        instructions: Mapping[str, Mapping[str, str] | None] | None,
    ) -> EmbedConfig:
        """Build a config from header properties and the pre-parsed
        Embed-Dependency clauses."""
        return cls(
            clauses=tuple(clauses_from_mapping(instructions or {})),
            embed_directory=properties.get(EMBED_DIRECTORY),
            strip_group=parse_flag(properties.get(EMBED_STRIP_GROUP, "true")),
            strip_version=parse_flag(properties.get(EMBED_STRIP_VERSION)),
            transitive=parse_flag(properties.get(EMBED_TRANSITIVE)),
        )


@dataclass
class Classification:
    """Inlined and embedded dependencies of one resolution pass."""

    inlined: dict[Dependency, None] = field(default_factory=dict)
    embedded: dict[Dependency, None] = field(default_factory=dict)

    def sorted_inlined(self) -> list[Dependency]:
        return sorted(self.inlined, key=Dependency.sort_key)

    def sorted_embedded(self) -> list[Dependency]:
        return sorted(self.embedded, key=Dependency.sort_key)


@dataclass(frozen=True)
class EmbedResult:
    """Outcome of a resolution pass: classification plus header values."""

    inlined: tuple[Dependency, ...] = ()
    embedded: tuple[Dependency, ...] = ()
    bundle_classpath: str | None = None
    include_resource: str | None = None

    def headers(self) -> dict[str, str]:
        """Return the output headers that have a value, keyed by header name."""
        out: dict[str, str] = {}
        if self.bundle_classpath is not None:
            out[BUNDLE_CLASSPATH] = self.bundle_classpath
        if self.include_resource is not None:
            out[INCLUDE_RESOURCE] = self.include_resource
        return out

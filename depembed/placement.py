"""Placement emitter — compute target paths and build the bundle headers."""

from __future__ import annotations

import os
import posixpath
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from pathlib import Path

from depembed.models import BUNDLE_CLASSPATH, INCLUDE_RESOURCE, Dependency, EmbedConfig

DELIMITER = ","
CURRENT_DIRECTORY = "."
INLINE_MARKER = "@"


@dataclass
class ManifestHeaders:
    """Running values of Bundle-ClassPath and Include-Resource.

    ``None`` means the header has no value yet.
    """

    bundle_classpath: str | None = None
    include_resource: str | None = None

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> ManifestHeaders:
        return cls(
            bundle_classpath=properties.get(BUNDLE_CLASSPATH),
            include_resource=properties.get(INCLUDE_RESOURCE),
        )

    def apply_to(self, properties: MutableMapping[str, str]) -> None:
        """Write the header values that are set back into *properties*."""
        if self.bundle_classpath is not None:
            properties[BUNDLE_CLASSPATH] = self.bundle_classpath
        if self.include_resource is not None:
            properties[INCLUDE_RESOURCE] = self.include_resource

    def append_classpath(self, entry: str) -> None:
        # only an absent header gets the "." seed; an empty one is just extended
        if self.bundle_classpath is None:
            self.bundle_classpath = CURRENT_DIRECTORY + DELIMITER + entry
        elif self.bundle_classpath:
            self.bundle_classpath += DELIMITER + entry
        else:
            self.bundle_classpath = entry

    def append_resource(self, entry: str) -> None:
        if self.include_resource:
            self.include_resource += DELIMITER + entry
        else:
            self.include_resource = entry


def source_file(dependency: Dependency) -> Path | None:
    """Return the dependency's file if it exists on disk."""
    if dependency.file is None:
        return None
    path = Path(dependency.file)
    return path if path.exists() else None


def _to_portable(path: str) -> str:
    if os.sep != "/":
        path = path.replace(os.sep, "/")
    return path


def target_path(dependency: Dependency, source: Path, config: EmbedConfig) -> str:
    """Compute where *dependency* lands inside the bundle."""
    directory = config.embed_directory
    if directory in ("", CURRENT_DIRECTORY):
        directory = None

    segments: list[str] = []
    if directory is not None:
        segments.append(_to_portable(directory))
    if not config.strip_group:
        segments.append(dependency.group_id)

    if config.strip_version:
        if dependency.extension is not None:
            file_name = f"{dependency.artifact_id}.{dependency.extension}"
        else:
            file_name = dependency.artifact_id
    else:
        file_name = source.name
    segments.append(file_name)

    return posixpath.join(*segments)


def embed(
    dependency: Dependency,
    config: EmbedConfig,
    headers: ManifestHeaders,
) -> tuple[str, str] | None:
    """Place *dependency* as a nested file.

    Appends to both headers and returns the (classpath, resource) entries, or
    ``None`` when the dependency has no file on disk.
    """
    source = source_file(dependency)
    if source is None:
        return None

    target = target_path(dependency, source, config)
    resource_entry = f"{target}={source}"

    headers.append_resource(resource_entry)
    headers.append_classpath(target)
    return target, resource_entry


def inline(dependency: Dependency, headers: ManifestHeaders) -> str | None:
    """Merge *dependency*'s contents into the bundle."""
    source = source_file(dependency)
    if source is None:
        return None

    resource_entry = f"{INLINE_MARKER}{source}"
    headers.append_resource(resource_entry)
    return resource_entry

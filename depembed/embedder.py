"""DependencyEmbedder — turn Embed-Dependency instructions into bundle headers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, MutableMapping

import structlog

from depembed import filters, placement
from depembed.models import (
    Classification,
    Dependency,
    EmbedConfig,
    EmbedResult,
)
from depembed.placement import ManifestHeaders

log = structlog.get_logger("depembed.embedder")


class DependencyEmbedder:
    """Classify a build's dependencies and emit the embedding headers.

    Every call to :meth:`process` starts from a clean classification; the
    last one is available through :attr:`inlined` and :attr:`embedded`,
    including the partial result of a pass that failed.
    """

    def __init__(self, dependencies: Iterable[Dependency]) -> None:
        self._dependencies = tuple(dependencies)
        self._classification = Classification()

    @property
    def inlined(self) -> list[Dependency]:
        return self._classification.sorted_inlined()

    @property
    def embedded(self) -> list[Dependency]:
        return self._classification.sorted_embedded()

    def candidates(self, config: EmbedConfig) -> list[Dependency]:
        """Dependencies eligible for embedding under *config*."""
        if config.transitive:
            return list(self._dependencies)
        return [d for d in self._dependencies if d.direct]

    def process(
        self,
        config: EmbedConfig,
        existing: ManifestHeaders | None = None,
    ) -> EmbedResult:
        """Resolve *config* and return the classification and header values.

        *existing* carries header values already present in the bundle
        instructions; new entries are appended to them.
        """
        self._classification = Classification()
        headers = ManifestHeaders(
            bundle_classpath=existing.bundle_classpath if existing else None,
            include_resource=existing.include_resource if existing else None,
        )

        if not config.clauses:
            return EmbedResult(
                bundle_classpath=headers.bundle_classpath,
                include_resource=headers.include_resource,
            )

        candidates = self.candidates(config)
        filters.resolve(candidates, config.clauses, self._classification)

        inlined = self._classification.sorted_inlined()
        embedded = self._classification.sorted_embedded()

        for dep in inlined:
            placement.inline(dep, headers)
        for dep in embedded:
            placement.embed(dep, config, headers)

        log.info(
            "embedder.resolved",
            clauses=len(config.clauses),
            candidates=len(candidates),
            inlined=len(inlined),
            embedded=len(embedded),
        )

        return EmbedResult(
            inlined=tuple(inlined),
            embedded=tuple(embedded),
            bundle_classpath=headers.bundle_classpath,
            include_resource=headers.include_resource,
        )

    def process_properties(
        self,
        properties: MutableMapping[str, str],
        instructions: Mapping[str, Mapping[str, str]] | None,
    ) -> EmbedResult:
        """Resolve against a mutable header mapping and write the results back.

        *instructions* is the already parsed Embed-Dependency header.
        """
        config = EmbedConfig.from_properties(properties, instructions)
        result = self.process(config, ManifestHeaders.from_properties(properties))
        ManifestHeaders(
            bundle_classpath=result.bundle_classpath,
            include_resource=result.include_resource,
        ).apply_to(properties)
        return result

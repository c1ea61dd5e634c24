"""Filter chain engine — classify dependencies from Embed-Dependency clauses."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

import structlog

from depembed.exceptions import ConfigurationError, VersionResolutionError
from depembed.instruction import Instruction
from depembed.models import Classification, Clause, Dependency, parse_flag

log = structlog.get_logger("depembed.filters")

INLINE_ATTRIBUTE = "inline"


def _version(dependency: Dependency) -> str:
    # use the symbolic version if available (ie. 1.0.0-SNAPSHOT)
    try:
        return dependency.get_selected_version()
    except VersionResolutionError:
        return dependency.version


def _optional(dependency: Dependency) -> str | None:
    if dependency.optional is None:
        return None
    return "true" if dependency.optional else "false"


@dataclass(frozen=True)
class AttributeSpec:
    """How a clause attribute reads its value from a dependency."""

    extract: Callable[[Dependency], str | None]
    default: str = ""


ATTRIBUTES: dict[str, AttributeSpec] = {
    "groupId": AttributeSpec(lambda d: d.group_id),
    "artifactId": AttributeSpec(lambda d: d.artifact_id),
    "version": AttributeSpec(_version),
    "scope": AttributeSpec(lambda d: d.scope, "compile"),
    "type": AttributeSpec(lambda d: d.type, "jar"),
    "classifier": AttributeSpec(lambda d: d.classifier),
    "optional": AttributeSpec(_optional, "false"),
}

RECOGNIZED_ATTRIBUTES = frozenset(ATTRIBUTES) | {INLINE_ATTRIBUTE}


class DependencyFilter:
    """One link of a clause's filter chain."""

    def __init__(self, expression: str, spec: AttributeSpec) -> None:
        self._instruction = Instruction.compile(expression)
        self._spec = spec

    @classmethod
    def for_attribute(cls, key: str, expression: str) -> DependencyFilter:
        spec = ATTRIBUTES.get(key)
        if spec is None:
            raise ConfigurationError(f"Unexpected attribute {key}", attribute=key)
        return cls(expression, spec)

    def matches(self, dependency: Dependency) -> bool:
        text = self._spec.extract(dependency)
        if text is None:
            text = self._spec.default
        return self._instruction.accepts(text)

    def filter(self, dependencies: list[Dependency]) -> list[Dependency]:
        return [d for d in dependencies if self.matches(d)]


def apply_clause(clause: Clause, candidates: Iterable[Dependency]) -> tuple[list[Dependency], bool]:
    """Narrow *candidates* by one clause.

    Returns the surviving dependencies and whether the clause asked for them
    to be inlined.
    """
    inline = False

    # fresh copy per clause so one clause never narrows another
    filtered = DependencyFilter.for_attribute("artifactId", clause.pattern).filter(list(candidates))

    for key, value in clause.attributes.items():
        if key == INLINE_ATTRIBUTE:
            inline = parse_flag(value)
            continue
        filtered = DependencyFilter.for_attribute(key, value).filter(filtered)

    return filtered, inline


def resolve(
    dependencies: Iterable[Dependency],
    clauses: Iterable[Clause],
    classification: Classification | None = None,
) -> Classification:
    """Classify *dependencies* as inlined or embedded.

    Results are merged into *classification* clause by clause, so when a
    clause raises :class:`ConfigurationError` the earlier clauses' results
    stay in the object the caller passed in.
    """
    if classification is None:
        classification = Classification()
    candidates = list(dict.fromkeys(dependencies))

    for clause in clauses:
        matched, inline = apply_clause(clause, candidates)
        target = classification.inlined if inline else classification.embedded
        for dep in matched:
            target[dep] = None
        log.debug(
            "filters.clause_applied",
            pattern=clause.pattern,
            inline=inline,
            matched=len(matched),
        )

    # inline wins over embed
    for dep in classification.inlined:
        classification.embedded.pop(dep, None)

    return classification

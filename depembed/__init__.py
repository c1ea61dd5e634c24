"""depembed: resolve Embed-Dependency instructions into bundle headers."""

__version__ = "0.1.0"

from depembed.embedder import DependencyEmbedder
from depembed.exceptions import (
    ConfigurationError,
    DescriptorError,
    EmbedError,
    VersionResolutionError,
)
from depembed.filters import resolve
from depembed.instruction import Instruction
from depembed.models import (
    Classification,
    Clause,
    Dependency,
    EmbedConfig,
    EmbedResult,
)
from depembed.placement import ManifestHeaders

__all__ = [
    "Classification",
    "Clause",
    "ConfigurationError",
    "Dependency",
    "DependencyEmbedder",
    "DescriptorError",
    "EmbedConfig",
    "EmbedError",
    "EmbedResult",
    "Instruction",
    "ManifestHeaders",
    "VersionResolutionError",
    "resolve",
]

"""CLI entry point: depembed.

Subcommands:
    depembed create-descriptor -o build.json   # Generate descriptor template
    depembed resolve build.json                # Print the embedding headers
    depembed resolve build.json --json         # ... as JSON with classification
"""

from __future__ import annotations

import dataclasses
import json
import os
import sys
from pathlib import Path

import click

from depembed.embedder import DependencyEmbedder
from depembed.exceptions import EmbedError
from depembed.logging import setup_logging
from depembed.models import EmbedResult
from depembed.schemas import load_descriptor

_DEFAULT_EMBED_DIRECTORY = os.environ.get("DEPEMBED_EMBED_DIRECTORY")

_DESCRIPTOR_TEMPLATE = {
    "dependencies": [
        {
            "group_id": "com.acme",
            "artifact_id": "widget",
            "version": "1.2.0",
            "scope": "compile",
            "file": "lib/widget-1.2.0.jar",
            "extension": "jar",
        },
        {
            "group_id": "org.example",
            "artifact_id": "helpers",
            "version": "0.3.1",
            "scope": "runtime",
            "file": "lib/helpers-0.3.1.jar",
            "extension": "jar",
        },
    ],
    "instructions": {
        "embed_dependency": {
            "widget": {"scope": "compile"},
            "helpers": {"inline": "true"},
        },
        "embed_directory": "lib",
        "embed_strip_group": "true",
        "embed_strip_version": "false",
    },
    "headers": {},
}


def _print_result(result: EmbedResult, as_json: bool) -> None:
    if as_json:
        payload = {
            "inlined": [d.coordinates for d in result.inlined],
            "embedded": [d.coordinates for d in result.embedded],
            "headers": result.headers(),
        }
        click.echo(json.dumps(payload, indent=2))
        return

    headers = result.headers()
    if not headers:
        click.echo("No dependencies embedded.")
        return
    for name, value in headers.items():
        click.echo(f"{name}: {value}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """depembed: embed build dependencies inside a bundle."""
    setup_logging("DEBUG" if verbose else None)


@main.command("create-descriptor")
@click.option("-o", "--output", default="build.json", help="Output file path")
def create_descriptor(output: str) -> None:
    """Generate a build descriptor template JSON file."""
    Path(output).write_text(json.dumps(_DESCRIPTOR_TEMPLATE, indent=2) + "\n")
    click.echo(f"Descriptor template written to {output}")
    click.echo("Edit the file, then run: depembed resolve " + output)


@main.command("resolve")
@click.argument("descriptor_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--embed-directory",
    default=_DEFAULT_EMBED_DIRECTORY,
    help="Directory inside the bundle for embedded files",
)
@click.option("--strip-group/--keep-group", default=None, help="Drop the groupId directory")
@click.option("--strip-version/--keep-version", default=None, help="Drop versions from file names")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def resolve(
    descriptor_file: str,
    embed_directory: str | None,
    strip_group: bool | None,
    strip_version: bool | None,
    as_json: bool,
) -> None:
    """Resolve the Embed-Dependency instructions of a build descriptor."""
    try:
        descriptor, dependencies = load_descriptor(Path(descriptor_file))
        config = descriptor.instructions.to_config()

        overrides: dict[str, object] = {}
        if embed_directory is not None:
            overrides["embed_directory"] = embed_directory
        if strip_group is not None:
            overrides["strip_group"] = strip_group
        if strip_version is not None:
            overrides["strip_version"] = strip_version
        if overrides:
            config = dataclasses.replace(config, **overrides)

        result = DependencyEmbedder(dependencies).process(config, descriptor.existing_headers())
    except EmbedError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _print_result(result, as_json)

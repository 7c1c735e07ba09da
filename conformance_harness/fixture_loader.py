"""Loading of conformance fixtures and their metadata headers."""

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from conformance_harness.errors import FixtureNotFoundError, InvalidFixtureError
from conformance_harness.models.fixture import (
    Fixture,
    FixtureMetadata,
    NegativeExpectation,
)

log = logging.getLogger(__name__)

FRONTMATTER = re.compile(r"/\*---(?P<body>.*?)---\*/", re.DOTALL)
LEGACY_HEADER = re.compile(r"/\*\*(?P<body>.*?)\*/", re.DOTALL)
LEGACY_TAG = re.compile(
    r"^[ \t*]*@(?P<name>\w+)(?:[ \t]+(?P<value>[^\n]*?))?[ \t]*$", re.MULTILINE
)

LEGACY_FLAG_TAGS = frozenset({"onlyStrict", "noStrict"})


def load_fixture(path: Path) -> Fixture:
    """Load a fixture and parse its metadata header.

    Args:
        path: Location of the fixture source file

    Returns:
        The loaded fixture

    Raises:
        FixtureNotFoundError: If the file doesn't exist
        InvalidFixtureError: If the file can't be decoded or the metadata
            is malformed

    """
    if not path.is_file():
        raise FixtureNotFoundError(f"Fixture not found: {path}")

    try:
        source = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidFixtureError(f"Fixture is not valid UTF-8: {path}") from e

    metadata = parse_metadata(source, path)
    log.debug("Loaded fixture %s (%s)", path, metadata.description or "-")
    return Fixture(path=path, source=source, metadata=metadata)


def parse_metadata(source: str, path: Path) -> FixtureMetadata:
    """Parse the YAML frontmatter or legacy doc comment of a fixture."""
    if match := FRONTMATTER.search(source):
        return parse_frontmatter(match.group("body"), path)

    if match := LEGACY_HEADER.search(source):
        return parse_legacy_header(match.group("body"))

    return FixtureMetadata()


def parse_frontmatter(body: str, path: Path) -> FixtureMetadata:
    """Parse test262 YAML frontmatter."""
    try:
        data: Any = yaml.safe_load(body)
    except yaml.YAMLError as e:
        raise InvalidFixtureError(f"Invalid YAML frontmatter in {path}: {e}") from e

    if data is None:
        return FixtureMetadata()

    if not isinstance(data, dict):
        raise InvalidFixtureError(
            f"Invalid fixture metadata in {path}: frontmatter must be a mapping"
        )

    if isinstance(description := data.get("description"), str):
        data["description"] = description.strip()

    try:
        return FixtureMetadata.model_validate(data)
    except ValidationError as e:
        raise InvalidFixtureError(f"Invalid fixture metadata in {path}: {e}") from e


def parse_legacy_header(body: str) -> FixtureMetadata:
    """Parse ``@tag value`` lines of a legacy doc comment."""
    tags: dict[str, str] = {}
    flags: list[str] = []

    for match in LEGACY_TAG.finditer(body):
        name = match.group("name")
        value = (match.group("value") or "").strip()
        if name in LEGACY_FLAG_TAGS:
            flags.append(name)
        else:
            tags[name] = value

    negative = None
    if "negative" in tags:
        negative = NegativeExpectation(phase="any", pattern=tags["negative"] or None)

    return FixtureMetadata(
        description=tags.get("description", ""),
        path=tags.get("path") or None,
        flags=flags,
        negative=negative,
    )

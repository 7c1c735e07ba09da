"""Discover fixture files under the given paths."""

import logging
from collections.abc import Sequence
from pathlib import Path

log = logging.getLogger(__name__)

FIXTURE_SUFFIX = ".js"

# Support files imported by module fixtures, never run on their own.
SUPPORT_FILE_SUFFIX = "_FIXTURE.js"


def discover_fixtures(paths: Sequence[Path]) -> Sequence[Path]:
    """Expand files and directories into an ordered list of fixture paths.

    Files are kept as given, even when they don't exist, so that loading
    reports them. Directories are searched recursively and their fixtures
    sorted. Duplicates are dropped, keeping the first occurrence.

    Args:
        paths: Fixture files and directories (e.g., [Path("test/built-ins")])

    Returns:
        Fixture paths in discovery order

    """
    discovered: dict[Path, None] = {}

    for path in paths:
        if path.is_dir():
            found = sorted(
                candidate
                for candidate in path.rglob(f"*{FIXTURE_SUFFIX}")
                if is_fixture_file(candidate)
            )
            log.debug("Found %d fixture(s) in %s", len(found), path)
            discovered.update(dict.fromkeys(found))
        else:
            discovered[path] = None

    return list(discovered)


def is_fixture_file(path: Path) -> bool:
    """Check if a path names a runnable fixture."""
    return (
        path.is_file()
        and path.name.endswith(FIXTURE_SUFFIX)
        and not path.name.endswith(SUPPORT_FILE_SUFFIX)
    )

"""Loading of hosts from entry points."""

from importlib.metadata import entry_points
from typing import Any

from conformance_harness.errors import HostNotFoundError
from conformance_harness.hosts.manifest import HostManifest

ENTRY_POINT_GROUP = "conformance_harness.hosts"


def load_host_manifest(key: str) -> HostManifest[Any]:
    """Load a host manifest by key.

    Args:
        key: The host key as registered in pyproject.toml (e.g., "v8")

    Returns:
        The host manifest instance

    Raises:
        HostNotFoundError: If no host with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: HostManifest[Any] = entry.load()
            return manifest

    available = [e.name for e in entries]
    raise HostNotFoundError(f"Host '{key}' not found. Available hosts: {available}")

"""V8 host module."""

from conformance_harness.hosts.v8.config import V8Config
from conformance_harness.hosts.v8.host import V8Host, V8Realm
from conformance_harness.hosts.v8.manifest import v8_manifest

__all__ = ["V8Config", "V8Host", "V8Realm", "v8_manifest"]

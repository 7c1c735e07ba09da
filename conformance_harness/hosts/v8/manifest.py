"""V8 host manifest."""

from conformance_harness.hosts.manifest import HostManifest
from conformance_harness.hosts.v8.config import V8Config
from conformance_harness.hosts.v8.host import V8Host

v8_manifest = HostManifest(
    config_cls=V8Config,
    host_factory=V8Host.from_config,
)

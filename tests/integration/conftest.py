"""Fixtures for integration tests running on the V8 host."""

from pathlib import Path
from typing import Protocol

import pytest

from conformance_harness.hosts.v8 import V8Config, V8Host
from conformance_harness.runner import FixtureRunner

ESCAPE_FIXTURE = """/// Copyright (c) 2012 Ecma International.  All rights reserved. 
/// Ecma International makes this code available under the terms and conditions set
/// forth on http://hg.ecmascript.org/tests/test262/raw-file/tip/LICENSE (the 
/// "Use Terms").   Any redistribution of this code must retain the above 
/// copyright and this notice and otherwise comply with the Use Terms.
/**
 * @path ch15/15.2/15.2.3/15.2.3.3/15.2.3.3-4-12.js
 * @description Object.getOwnPropertyDescriptor returns data desc for functions on built-ins (Global.escape)
 */


function testcase() {
  var global = fnGlobalObject();
  var desc = Object.getOwnPropertyDescriptor(global, "escape");
  if (desc.value === global.escape &&
      desc.writable === true &&
      desc.enumerable === false &&
      desc.configurable === true) {
    return true;
  }
 }
runTestCase(testcase);
"""

ENUMERABLE_ESCAPE_SETUP = 'Object.defineProperty(this, "escape", {enumerable: true});'


class WriteFixtureFn(Protocol):
    """Protocol for fixture writing function."""

    def __call__(self, name: str, source: str) -> Path:
        """Write a fixture file and return its path."""


@pytest.fixture
def write_fixture(tmp_path: Path) -> WriteFixtureFn:
    """Return a function to write fixture files."""

    def _write(name: str, source: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source)
        return path

    return _write


@pytest.fixture
def escape_fixture_path(write_fixture: WriteFixtureFn) -> Path:
    """Write the Global.escape descriptor fixture."""
    return write_fixture("15.2.3.3-4-12.js", ESCAPE_FIXTURE)


@pytest.fixture
def v8_host() -> V8Host:
    """Create a conformant V8 host."""
    return V8Host(config=V8Config(timeout=5))


@pytest.fixture
def non_conformant_host() -> V8Host:
    """Create a V8 host whose global escape function is enumerable."""
    return V8Host(config=V8Config(timeout=5, setup_script=ENUMERABLE_ESCAPE_SETUP))


@pytest.fixture
def runner(v8_host: V8Host) -> FixtureRunner:
    """Create runner on the conformant V8 host."""
    return FixtureRunner(host=v8_host)

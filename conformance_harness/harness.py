"""Harness prelude evaluated in every realm before a fixture.

The prelude binds ``fnGlobalObject`` and ``runTestCase`` into the fixture's
scope together with the usual test262 helpers. ``runTestCase`` records
outcomes in ``OUTCOMES_BINDING`` and ``$PRINT`` appends to
``OUTPUT_BINDING``; the runner reads both back after evaluation.
"""

OUTCOMES_BINDING = "__harnessOutcomes"
OUTPUT_BINDING = "__harnessOutput"

HARNESS_SOURCE = f"""
Object.defineProperty(this, "{OUTCOMES_BINDING}", {{value: [], configurable: true}});
Object.defineProperty(this, "{OUTPUT_BINDING}", {{value: [], configurable: true}});

function Test262Error(message) {{
  this.message = message || "";
}}
Test262Error.prototype.name = "Test262Error";
Test262Error.prototype.toString = Error.prototype.toString;
Test262Error.thrower = function (message) {{
  throw new Test262Error(message);
}};

function $ERROR(message) {{
  throw new Test262Error(message);
}}

function $FAIL(message) {{
  throw new Test262Error(message);
}}

function $DONOTEVALUATE() {{
  throw "Test262: This statement should not be evaluated.";
}}

function $PRINT(message) {{
  {OUTPUT_BINDING}.push(String(message));
}}

function fnGlobalObject() {{
  return Function("return this")();
}}

function fnExists() {{
  for (var i = 0; i < arguments.length; i++) {{
    if (typeof arguments[i] !== "function") {{
      return false;
    }}
  }}
  return true;
}}

function runTestCase(testcase) {{
  {OUTCOMES_BINDING}.push(testcase() === true);
}}

function compareArray(a, b) {{
  if (b.length !== a.length) {{
    return false;
  }}
  for (var i = 0; i < a.length; i++) {{
    if (!assert._isSameValue(b[i], a[i])) {{
      return false;
    }}
  }}
  return true;
}}

function assert(mustBeTrue, message) {{
  if (mustBeTrue === true) {{
    return;
  }}
  if (message === undefined) {{
    message = "Expected true but got " + assert._toString(mustBeTrue);
  }}
  throw new Test262Error(message);
}}

assert._isSameValue = function (a, b) {{
  if (a === b) {{
    return a !== 0 || 1 / a === 1 / b;
  }}
  return a !== a && b !== b;
}};

assert._toString = function (value) {{
  try {{
    if (value === 0 && 1 / value === -Infinity) {{
      return "-0";
    }}
    return String(value);
  }} catch (err) {{
    if (err.name === "TypeError") {{
      return Object.prototype.toString.call(value);
    }}
    throw err;
  }}
}};

assert.sameValue = function (actual, expected, message) {{
  if (assert._isSameValue(actual, expected)) {{
    return;
  }}
  message = message === undefined ? "" : message + " ";
  throw new Test262Error(
    message + "Expected SameValue(" + assert._toString(actual) + ", " +
    assert._toString(expected) + ") to be true"
  );
}};

assert.notSameValue = function (actual, unexpected, message) {{
  if (!assert._isSameValue(actual, unexpected)) {{
    return;
  }}
  message = message === undefined ? "" : message + " ";
  throw new Test262Error(
    message + "Expected SameValue(" + assert._toString(actual) + ", " +
    assert._toString(unexpected) + ") to be false"
  );
}};

assert.throws = function (expectedErrorConstructor, func, message) {{
  message = message === undefined ? "" : message + " ";
  if (typeof func !== "function") {{
    throw new Test262Error(message + "assert.throws requires a function argument");
  }}
  try {{
    func();
  }} catch (thrown) {{
    if (typeof thrown !== "object" || thrown === null) {{
      throw new Test262Error(message + "Thrown value was not an object!");
    }}
    if (thrown.constructor !== expectedErrorConstructor) {{
      throw new Test262Error(
        message + "Expected a " + expectedErrorConstructor.name +
        " but got a " + thrown.constructor.name
      );
    }}
    return;
  }}
  throw new Test262Error(
    message + "Expected a " + expectedErrorConstructor.name +
    " to be thrown but no exception was thrown at all"
  );
}};

assert.compareArray = function (actual, expected, message) {{
  message = message === undefined ? "" : message + " ";
  if (!compareArray(actual, expected)) {{
    throw new Test262Error(
      message + "Expected [" + expected.join(", ") + "] and [" +
      actual.join(", ") + "] to have the same contents"
    );
  }}
}};

function verifyProperty(obj, name, desc) {{
  var actual = Object.getOwnPropertyDescriptor(obj, name);
  if (desc === undefined) {{
    assert.sameValue(actual, undefined, "'" + String(name) + "' must not exist");
    return;
  }}
  assert.notSameValue(actual, undefined, "'" + String(name) + "' must exist");
  var attributes = ["value", "writable", "enumerable", "configurable"];
  for (var i = 0; i < attributes.length; i++) {{
    var attribute = attributes[i];
    if (Object.prototype.hasOwnProperty.call(desc, attribute)) {{
      assert.sameValue(
        actual[attribute],
        desc[attribute],
        "descriptor " + attribute + " of '" + String(name) + "'"
      );
    }}
  }}
}}
"""

"""Tests for hook import reconciliation."""

from hookify.core.config import ConvertSettings
from hookify.core.convert import transform_source

SETTINGS = ConvertSettings()

COMPONENT_BODY = '''class Timer extends Component {
  state = { ticks: 0 };

  componentDidMount() {
    start();
  }

  render() {
    return this.state.ticks;
  }
}
'''


def _convert(source, file_path="Timer.jsx", settings=SETTINGS):
    return transform_source(source, file_path, settings=settings).output


# =========================================================================
# Tests: Existing imports
# =========================================================================

class TestExistingImports:
    def test_extends_named_list(self):
        output = _convert('import { Component } from "react";\n\n' + COMPONENT_BODY)
        assert output.startswith('import { Component, useState, useEffect } from "react";\n')

    def test_adds_named_list_to_default_import(self):
        output = _convert('import React from "react";\n' + COMPONENT_BODY)
        assert output.startswith('import React, { useState, useEffect } from "react";\n')

    def test_uses_aliased_import(self):
        source = 'import React, { useState as useS, useEffect } from "react";\n' + COMPONENT_BODY
        output = _convert(source)
        assert output.startswith('import React, { useState as useS, useEffect } from "react";\n')
        assert "const [ticks, setTicks] = useS(0);" in output
        assert output.count("useState") == 1
        assert output.count("useEffect") == 2

    def test_replaces_side_effect_import(self):
        output = _convert('import "react";\n' + COMPONENT_BODY)
        assert output.startswith('import { useState, useEffect } from "react";\n')

    def test_namespace_import_gets_separate_import(self):
        output = _convert('import * as React from "react";\n' + COMPONENT_BODY)
        assert output.startswith('import { useState, useEffect } from "react";\nimport * as React from "react";\n')

    def test_single_quotes_recognised(self):
        output = _convert("import React from 'react';\n" + COMPONENT_BODY)
        assert output.startswith("import React, { useState, useEffect } from 'react';\n")

    def test_type_only_import_ignored(self):
        source = 'import type { FC } from "react";\n' + COMPONENT_BODY
        output = _convert(source, "Timer.tsx")
        assert 'import type { FC } from "react";' in output
        assert 'import { useState, useEffect } from "react";' in output


# =========================================================================
# Tests: New imports
# =========================================================================

class TestNewImports:
    def test_inserted_at_top(self):
        output = _convert(COMPONENT_BODY)
        assert output.startswith('import { useState, useEffect } from "react";\nconst Timer = (props) => {')

    def test_after_hashbang_and_directives(self):
        source = '#!/usr/bin/env node\n"use strict";\n' + COMPONENT_BODY
        output = _convert(source)
        assert output.startswith(
            '#!/usr/bin/env node\n"use strict";\nimport { useState, useEffect } from "react";\nconst Timer'
        )

    def test_bound_name_not_imported(self):
        source = "const useState = makeHook();\n" + COMPONENT_BODY
        output = _convert(source)
        assert 'import { useEffect } from "react";' in output
        assert "const [ticks, setTicks] = useState(0);" in output

    def test_only_needed_hooks(self):
        source = "class A extends Component {\n  state = { a: 1 };\n  render() {\n    return null;\n  }\n}\n"
        output = _convert(source)
        assert output.startswith('import { useState } from "react";\n')
        assert "useEffect" not in output

    def test_no_hooks_no_import(self):
        source = "class A extends Component {\n  render() {\n    return null;\n  }\n}\n"
        assert "import" not in _convert(source)

    def test_configured_module(self):
        settings = ConvertSettings(framework_module="preact/compat")
        output = _convert(COMPONENT_BODY, settings=settings)
        assert output.startswith('import { useState, useEffect } from "preact/compat";\n')


# =========================================================================
# Tests: Several components per file
# =========================================================================

class TestSeveralComponents:
    def test_symbols_never_duplicated(self):
        second = COMPONENT_BODY.replace("Timer", "Other")
        output = _convert(COMPONENT_BODY + "\n" + second)
        assert output.count('from "react"') == 1
        assert output.count("useState,") == 1
        assert "const Timer = (props) => {" in output
        assert "const Other = (props) => {" in output

    def test_second_component_extends_first_import(self):
        first = "class A extends Component {\n  state = { a: 1 };\n  render() {\n    return null;\n  }\n}\n"
        second = "class B extends Component {\n  componentDidMount() {}\n  render() {\n    return null;\n  }\n}\n"
        output = _convert(first + "\n" + second)
        assert output.startswith('import { useState, useEffect } from "react";\n')

"""Tests for the syntax package: parsing, the arena, printing and scope lookup."""

import pytest

from hookify.core.syntax import (
    NodeKind,
    ParseResult,
    SourceParseError,
    Printer,
    declared_names,
    detect_language,
    import_bindings,
    is_name_bound,
    is_supported_file,
    iter_source_files,
    parse_file,
    parse_source,
    print_tree,
    should_skip_directory,
)


# =========================================================================
# Sample sources
# =========================================================================

SIMPLE_MODULE = '''// leading comment

const a = b + 1;

function f(x) {
  return x * 2;
}
'''

CLASS_COMPONENT = '''import React from "react";

class Counter extends React.Component {
  state = { count: 0 };

  render() {
    return <span>{this.state.count}</span>;
  }
}
'''

TS_COMPONENT = '''import React from "react";

class Label extends React.Component<Props, State> {
  state: State = { text: "" };
  private ready = false;

  render() {
    return <b>{this.props.name}</b>;
  }
}
'''

SCOPED = '''import React, { useState as useS } from "react";

function outer(a, { b, c: [d] }) {
  const e = 1;
  if (a) {
    let inner = 2;
    return inner + b + d + e;
  }
  return e;
}
'''

SYNTAX_ERROR = '''class Broken extends Component {
  render( {
    return null;
  }
'''


def _find(arena, kind, text=None):
    for index in arena.walk(arena.root):
        if arena.kind(index) is kind and (text is None or arena.text(index) == text):
            return index
    raise AssertionError(f"no {kind} node with text {text!r}")


# =========================================================================
# Tests: Language detection
# =========================================================================

class TestLanguageDetection:
    def test_javascript(self):
        assert detect_language("src/App.js") == "javascript"
        assert detect_language("src/App.jsx") == "javascript"
        assert detect_language("src/App.mjs") == "javascript"

    def test_typescript(self):
        assert detect_language("src/App.ts") == "typescript"
        assert detect_language("src/App.tsx") == "tsx"

    def test_unknown(self):
        assert detect_language("setup.py") is None
        assert not is_supported_file("README.md")

    def test_case_insensitive(self):
        assert detect_language("APP.JSX") == "javascript"

    def test_unsupported_language_raises(self):
        with pytest.raises(ValueError):
            parse_source("x = 1", "script.py")


# =========================================================================
# Tests: Parsing
# =========================================================================

class TestParsing:
    def test_parse_result(self):
        result = parse_source(SIMPLE_MODULE, "simple.js")
        assert isinstance(result, ParseResult)
        assert result.language == "javascript"
        assert result.line_count == 7
        assert result.arena.kind(result.arena.root) is NodeKind.PROGRAM

    def test_class_shape(self):
        arena = parse_source(CLASS_COMPONENT, "Counter.jsx").arena
        cls = _find(arena, NodeKind.CLASS_DECLARATION)
        assert arena.text(arena.child(cls, "name")) == "Counter"

        field = _find(arena, NodeKind.FIELD)
        assert arena.text(arena.child(field, "property")) == "state"
        assert arena.kind(arena.child(field, "value")) is NodeKind.OBJECT

        method = _find(arena, NodeKind.METHOD)
        assert arena.text(arena.child(method, "name")) == "render"
        assert arena.kind(arena.child(method, "body")) is NodeKind.STATEMENT_BLOCK

    def test_typescript_fields_use_property(self):
        arena = parse_source(TS_COMPONENT, "Label.tsx").arena
        names = [
            arena.text(arena.child(i, "property"))
            for i in arena.walk(arena.root)
            if arena.kind(i) is NodeKind.FIELD
        ]
        assert names == ["state", "ready"]

    def test_typescript_heritage(self):
        arena = parse_source(TS_COMPONENT, "Label.tsx").arena
        clause = _find(arena, NodeKind.EXTENDS_CLAUSE)
        assert arena.text(arena.child(clause, "value")) == "React.Component"

    def test_tokens_are_children(self):
        arena = parse_source("class A { static x = 1; }", "a.js").arena
        field = _find(arena, NodeKind.FIELD)
        assert arena.has_token(field, "static")
        assert not arena.has_token(field, "async")

    def test_syntax_error(self):
        with pytest.raises(SourceParseError) as exc_info:
            parse_source(SYNTAX_ERROR, "Broken.jsx")
        assert exc_info.value.file_path == "Broken.jsx"
        assert exc_info.value.line >= 1

    def test_parse_file(self, tmp_path):
        path = tmp_path / "Counter.jsx"
        path.write_text(CLASS_COMPONENT)
        result = parse_file(str(path))
        assert result.file_path == str(path)
        assert result.language == "javascript"


# =========================================================================
# Tests: Arena editing and printing
# =========================================================================

class TestPrinting:
    def test_unchanged_tree_prints_verbatim(self):
        for source, name in ((SIMPLE_MODULE, "a.js"), (CLASS_COMPONENT, "b.jsx"), (TS_COMPONENT, "c.tsx")):
            arena = parse_source(source, name).arena
            assert print_tree(arena) == source

    def test_surrounding_whitespace_kept(self):
        source = "\n\n  const a = 1;\n\n\n"
        arena = parse_source(source, "a.js").arena
        assert print_tree(arena) == source

    def test_replace_leaf(self):
        arena = parse_source(SIMPLE_MODULE, "a.js").arena
        target = _find(arena, NodeKind.IDENTIFIER, "b")
        arena.replace_subtree(target, [arena.leaf("identifier", "c", NodeKind.IDENTIFIER)])
        output = print_tree(arena)
        assert "const a = c + 1;" in output
        assert "// leading comment" in output
        assert "return x * 2;" in output

    def test_replaced_subtree_is_detached(self):
        arena = parse_source("f(g(1));", "a.js").arena
        inner = _find(arena, NodeKind.CALL, "g(1)")
        number = _find(arena, NodeKind.NUMBER)
        assert arena.is_attached(number)
        arena.replace_subtree(inner, [arena.leaf("identifier", "x", NodeKind.IDENTIFIER)])
        assert not arena.is_attached(number)
        assert arena.is_attached(inner)
        assert print_tree(arena) == "f(x);"

    def test_replace_with_template(self):
        arena = parse_source("run(a);", "a.js").arena
        arg = _find(arena, NodeKind.IDENTIFIER, "a")
        wrapped = arena.synthesize(
            "arrow_function", "() => $value", kind=NodeKind.ARROW_FUNCTION,
            value=arena.leaf("identifier", "a", NodeKind.IDENTIFIER),
        )
        arena.replace_subtree(arg, [wrapped])
        assert print_tree(arena) == "run(() => a);"

    def test_replace_with_fragment(self):
        source = "function f() {\n  go();\n}\n"
        arena = parse_source(source, "a.js").arena
        statement = _find(arena, NodeKind.EXPRESSION_STATEMENT)
        first = arena.leaf("expression_statement", "one();")
        second = arena.leaf("expression_statement", "two();")
        arena.replace_subtree(statement, [first, second])
        assert print_tree(arena) == "function f() {\n  one();\n  two();\n}\n"

    def test_replace_with_block_fragment(self):
        arena = parse_source("if (x) go();", "a.js").arena
        statement = _find(arena, NodeKind.EXPRESSION_STATEMENT)
        first = arena.leaf("expression_statement", "one();")
        second = arena.leaf("expression_statement", "two();")
        arena.replace_subtree(statement, [first, second], block=True)
        assert print_tree(arena) == "if (x) { one(); two(); }"

    def test_insert_children(self):
        arena = parse_source("const a = 1;\n", "a.js").arena
        statement = arena.leaf("import_statement", 'import x from "x";', NodeKind.IMPORT)
        arena.insert_children(arena.root, 0, [statement])
        assert print_tree(arena) == 'import x from "x";\nconst a = 1;\n'

    def test_annotations(self):
        arena = parse_source("use(this.value);", "a.js").arena
        this = _find(arena, NodeKind.THIS)
        output = Printer(arena, [(this, "@warning: check")]).print()
        assert output == "use(/* @warning: check */ this.value);"

    def test_walk_is_preorder(self):
        arena = parse_source("a(b);", "a.js").arena
        order = list(arena.walk(arena.root))
        assert order[0] == arena.root
        call = _find(arena, NodeKind.CALL)
        callee = _find(arena, NodeKind.IDENTIFIER, "a")
        assert order.index(call) < order.index(callee)

    def test_walk_prune(self):
        arena = parse_source("a(b);", "a.js").arena
        call = _find(arena, NodeKind.CALL)
        visited = list(arena.walk(arena.root, prune=lambda i: i == call))
        assert call in visited
        assert _find(arena, NodeKind.IDENTIFIER, "a") not in visited

    def test_position(self):
        arena = parse_source("\n  foo();", "a.js").arena
        call = _find(arena, NodeKind.CALL)
        assert arena.position(call) == (2, 2)
        assert arena.line_indent(call) == "  "


# =========================================================================
# Tests: Scope lookup
# =========================================================================

class TestScope:
    def test_import_bindings(self):
        arena = parse_source(SCOPED, "a.js").arena
        statement = _find(arena, NodeKind.IMPORT)
        assert import_bindings(arena, statement) == [("default", "React"), ("useState", "useS")]

    def test_names_bound_in_nested_block(self):
        arena = parse_source(SCOPED, "a.js").arena
        inner = _find(arena, NodeKind.IDENTIFIER, "inner")
        for name in ("React", "useS", "outer", "a", "b", "d", "e", "inner"):
            assert is_name_bound(arena, inner, name), name
        assert not is_name_bound(arena, inner, "useState")
        assert not is_name_bound(arena, inner, "c")

    def test_block_scope_not_visible_outside(self):
        arena = parse_source(SCOPED, "a.js").arena
        returns = [i for i in arena.walk(arena.root) if arena.kind(i) is NodeKind.RETURN]
        outer_return = returns[-1]
        assert not is_name_bound(arena, outer_return, "inner")
        assert is_name_bound(arena, outer_return, "e")

    def test_declared_names(self):
        arena = parse_source(SCOPED, "a.js").arena
        assert declared_names(arena, arena.root) == {"React", "useS", "outer"}


# =========================================================================
# Tests: File discovery
# =========================================================================

class TestFileDiscovery:
    def test_skip_directories(self):
        assert should_skip_directory("node_modules")
        assert should_skip_directory(".git")
        assert not should_skip_directory("components")

    def test_iter_source_files(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "App.jsx").write_text("")
        (tmp_path / "src" / "notes.md").write_text("")
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "node_modules" / "lib.js").write_text("")
        files = list(iter_source_files(str(tmp_path)))
        assert files == [str(tmp_path / "src" / "App.jsx")]

    def test_explicit_file_is_yielded(self, tmp_path):
        path = tmp_path / "whatever.txt"
        assert list(iter_source_files(str(path))) == [str(path)]

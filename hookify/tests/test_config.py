"""Tests for settings loading and the command-line entry point."""

import logging

from hookify.__main__ import main
from hookify.core.config import DEFAULT_CONFIG_PATH, FRAMEWORK_MODULE_ENV, ConvertSettings, load_settings

COMPONENT = '''class Hello extends Component {
  state = { name: "world" };

  render() {
    return <p>{this.state.name}</p>;
  }
}
'''


# =========================================================================
# Tests: Settings
# =========================================================================

class TestSettings:
    def test_defaults(self):
        settings = ConvertSettings()
        assert settings.framework_module == "react"
        assert settings.base_names == ["Component"]
        assert settings.lifecycle_methods == [
            "componentDidMount", "componentWillUnmount", "componentDidUnmount",
        ]

    def test_bundled_config_matches_defaults(self, monkeypatch):
        monkeypatch.delenv(FRAMEWORK_MODULE_ENV, raising=False)
        assert DEFAULT_CONFIG_PATH.exists()
        assert load_settings() == ConvertSettings()

    def test_yaml_overrides(self, tmp_path, monkeypatch):
        monkeypatch.delenv(FRAMEWORK_MODULE_ENV, raising=False)
        path = tmp_path / "hookify.yaml"
        path.write_text(
            "convert:\n"
            "  framework_module: preact/hooks\n"
            "  base_names: [Component, PureComponent]\n"
        )
        settings = load_settings(str(path))
        assert settings.framework_module == "preact/hooks"
        assert settings.base_names == ["Component", "PureComponent"]
        assert settings.state_hook == "useState"

    def test_unknown_key_warns(self, tmp_path, monkeypatch, caplog):
        monkeypatch.delenv(FRAMEWORK_MODULE_ENV, raising=False)
        path = tmp_path / "hookify.yaml"
        path.write_text("convert:\n  colour: blue\n")
        with caplog.at_level(logging.WARNING):
            settings = load_settings(str(path))
        assert settings == ConvertSettings()
        assert "colour" in caplog.text

    def test_missing_file_falls_back(self, tmp_path, monkeypatch, caplog):
        monkeypatch.delenv(FRAMEWORK_MODULE_ENV, raising=False)
        with caplog.at_level(logging.WARNING):
            settings = load_settings(str(tmp_path / "absent.yaml"))
        assert settings == ConvertSettings()
        assert "not found" in caplog.text

    def test_invalid_yaml_falls_back(self, tmp_path, monkeypatch):
        monkeypatch.delenv(FRAMEWORK_MODULE_ENV, raising=False)
        path = tmp_path / "hookify.yaml"
        path.write_text("convert: [unclosed\n")
        assert load_settings(str(path)) == ConvertSettings()

    def test_non_mapping_yaml_falls_back(self, tmp_path, monkeypatch, caplog):
        monkeypatch.delenv(FRAMEWORK_MODULE_ENV, raising=False)
        path = tmp_path / "hookify.yaml"
        for text in ("- a\n- b\n", "just text\n", "convert: [a, b]\n"):
            path.write_text(text)
            caplog.clear()
            with caplog.at_level(logging.ERROR):
                assert load_settings(str(path)) == ConvertSettings()
            assert "expected a 'convert' mapping" in caplog.text

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv(FRAMEWORK_MODULE_ENV, "preact/compat")
        assert load_settings().framework_module == "preact/compat"


# =========================================================================
# Tests: Command line
# =========================================================================

class TestCommandLine:
    def test_converts_in_place(self, tmp_path, monkeypatch):
        monkeypatch.delenv(FRAMEWORK_MODULE_ENV, raising=False)
        path = tmp_path / "Hello.jsx"
        path.write_text(COMPONENT)
        assert main([str(path)]) == 0
        output = path.read_text()
        assert 'const [name, setName] = useState("world");' in output
        assert "<p>{name}</p>" in output

    def test_dry_run_leaves_file(self, tmp_path, monkeypatch, capsys):
        monkeypatch.delenv(FRAMEWORK_MODULE_ENV, raising=False)
        path = tmp_path / "Hello.jsx"
        path.write_text(COMPONENT)
        assert main(["--dry-run", str(path)]) == 0
        assert path.read_text() == COMPONENT
        assert "const Hello = (props) => {" in capsys.readouterr().out

    def test_directory_and_parse_failure(self, tmp_path, monkeypatch):
        monkeypatch.delenv(FRAMEWORK_MODULE_ENV, raising=False)
        (tmp_path / "Hello.jsx").write_text(COMPONENT)
        (tmp_path / "Broken.js").write_text("class {")
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "node_modules" / "Dep.jsx").write_text(COMPONENT)

        assert main([str(tmp_path)]) == 1
        assert "useState" in (tmp_path / "Hello.jsx").read_text()
        assert (tmp_path / "Broken.js").read_text() == "class {"
        assert (tmp_path / "node_modules" / "Dep.jsx").read_text() == COMPONENT

    def test_missing_file_fails(self, tmp_path):
        assert main([str(tmp_path / "Missing.jsx")]) == 1

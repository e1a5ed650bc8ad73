"""Tests for ParseOptions and TOML config file loading."""

from __future__ import annotations

from pathlib import Path

from slotml.cli import build_parser, load_config, resolve_options
from slotml.config import HTML_RAW_TEXT_ELEMENTS, HTML_VOID_ELEMENTS, ParseOptions


class TestParseOptions:
    def test_defaults_are_core_behavior(self) -> None:
        opts = ParseOptions()
        assert opts.void_elements == frozenset()
        assert opts.raw_text_elements == frozenset()
        assert opts.strict_closing is False
        assert opts.preserve_whitespace is False

    def test_html_tables(self) -> None:
        opts = ParseOptions.html(strict_closing=True)
        assert "br" in opts.void_elements
        assert "script" in opts.raw_text_elements
        assert opts.strict_closing is True

    def test_build_merges_names(self) -> None:
        opts = ParseOptions.build(html=True, void_elements=["x-icon"])
        assert opts.void_elements == HTML_VOID_ELEMENTS | {"x-icon"}
        assert opts.raw_text_elements == HTML_RAW_TEXT_ELEMENTS

    def test_build_without_html(self) -> None:
        opts = ParseOptions.build(raw_text_elements=["code"])
        assert opts.void_elements == frozenset()
        assert opts.raw_text_elements == frozenset({"code"})


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[parser]\nstrict = true\n")
        result = load_config(cfg, tmp_path)
        assert result["parser"] == {"strict": True}

    def test_auto_discover_slotml_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "slotml.toml"
        cfg.write_text('[parser]\nvoid_elements = ["br"]\n')
        result = load_config(None, tmp_path)
        assert result["parser"] == {"void_elements": ["br"]}


class TestConfigMerge:
    def _resolve(self, tmp_path: Path, config: str, *argv: str):
        (tmp_path / "slotml.toml").write_text(config)
        doc = tmp_path / "page.sml"
        doc.write_text("")
        ns = build_parser().parse_args([str(doc), *argv])
        return resolve_options(ns)

    def test_config_parser_table(self, tmp_path: Path) -> None:
        opts = self._resolve(
            tmp_path,
            '[parser]\nvoid_elements = ["br"]\nraw_text_elements = ["code"]\n'
            "strict = true\npreserve_whitespace = true\n",
        )
        po = opts.parse_options
        assert po.void_elements == frozenset({"br"})
        assert po.raw_text_elements == frozenset({"code"})
        assert po.strict_closing is True
        assert po.preserve_whitespace is True

    def test_config_html_flag(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, "[parser]\nhtml = true\n")
        assert opts.parse_options.void_elements == HTML_VOID_ELEMENTS

    def test_cli_adds_to_config(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, '[parser]\nvoid_elements = ["br"]\n', "--void", "hr")
        assert opts.parse_options.void_elements == frozenset({"br", "hr"})

    def test_cli_format_overrides_config(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, '[output]\nformat = "tree"\n', "--format", "json")
        assert opts.format == "json"

    def test_config_format(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, '[output]\nformat = "tree"\n')
        assert opts.format == "tree"

    def test_wrong_types_ignored(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, '[parser]\nstrict = "yes"\nvoid_elements = "br"\n')
        assert opts.parse_options.strict_closing is False
        assert opts.parse_options.void_elements == frozenset()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        other = tmp_path / "other.toml"
        other.write_text("[parser]\nstrict = true\n")
        opts = self._resolve(tmp_path, "", "--config", str(other))
        assert opts.parse_options.strict_closing is True

"""Tests for configuration loading, merging and the derived options."""

import argparse
from pathlib import Path

import pytest
import yaml

from doxygen2docusaurus.deep_merge import deep_merge
from doxygen2docusaurus.load_config import DEFAULT_CONFIG, load_config
from doxygen2docusaurus.options import GeneratorOptions
from doxygen2docusaurus.run_conversion import build_options


def test_deep_merge_scalars() -> None:
    """Verify scalar replacement in deep merge."""
    assert deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4}) == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested() -> None:
    """Verify recursive merging of dictionaries."""
    merged = deep_merge({"nested": {"x": 1, "y": 2}}, {"nested": {"y": 3, "z": 4}})
    assert merged == {"nested": {"x": 1, "y": 3, "z": 4}}


def test_deep_merge_arrays_replace() -> None:
    """Verify that arrays are replaced by default."""
    assert deep_merge({"arr": [1, 2]}, {"arr": [3, 4]}) == {"arr": [3, 4]}


def test_deep_merge_keywords_additive() -> None:
    """Verify that the keywords list is merged additively without duplicates."""
    merged = deep_merge({"keywords": ["a", "b"]}, {"keywords": ["b", "c"]})
    assert merged == {"keywords": ["a", "b", "c"]}


def test_load_config_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify that defaults are used when no configuration file exists."""
    monkeypatch.chdir(tmp_path)
    assert load_config() == DEFAULT_CONFIG


def test_load_config_default_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify that the default configuration file name is picked up."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "doxygen2docusaurus.yml").write_text(
        yaml.safe_dump({"base_url": "/site/", "keywords": ["cpp"]}), encoding="utf-8"
    )
    config = load_config()
    assert config["base_url"] == "/site/"
    assert config["keywords"] == ["doxygen", "reference", "cpp"]
    assert config["docs_folder_path"] == "docs"


def test_load_config_unknown_keys(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Verify that unknown keys are reported and dropped."""
    path = tmp_path / "config.yml"
    path.write_text(yaml.safe_dump({"bse_url": "/typo/"}), encoding="utf-8")
    config = load_config(str(path))
    assert "bse_url" not in config
    assert "Unknown configuration key 'bse_url'" in caplog.text


def test_load_named_configuration(tmp_path: Path) -> None:
    """Verify that a named configuration is merged over the shared settings."""
    path = tmp_path / "config.yml"
    path.write_text(
        yaml.safe_dump(
            {
                "navbar_label": "Docs",
                "configurations": {"cpp": {"navbar_label": "C++", "verbose": True}},
            }
        ),
        encoding="utf-8",
    )
    config = load_config(str(path), "cpp")
    assert config["navbar_label"] == "C++"
    assert config["verbose"] is True
    assert "configurations" not in config


def test_load_missing_named_configuration(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text(yaml.safe_dump({"configurations": {"cpp": {}}}), encoding="utf-8")
    with pytest.raises(SystemExit):
        load_config(str(path), "rust")


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        load_config(str(tmp_path / "missing.yml"))


def test_load_config_not_a_mapping(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        load_config(str(path))


def test_options_derived_from_id() -> None:
    """Verify that an id derives the output names not set explicitly."""
    config = dict(DEFAULT_CONFIG, api_base_url="reference")
    options = GeneratorOptions.from_config(config, "cpp")
    assert options.id == "cpp"
    assert options.api_folder_path == "cpp"
    assert options.api_base_url == "reference"
    assert options.images_folder_path == "img/doxygen-cpp"
    assert options.sidebar_category_file_path == "sidebar-category-doxygen-cpp.json"
    assert options.navbar_file_path == "docusaurus-config-navbar-doxygen-cpp.json"


def test_options_default_id() -> None:
    options = GeneratorOptions.from_config(DEFAULT_CONFIG)
    assert options.id == "default"
    assert options.api_folder_path == "api"


def test_command_line_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify that command line values win over the configuration."""
    monkeypatch.chdir(tmp_path)
    args = argparse.Namespace(
        config=None,
        id=None,
        doxygen_xml_input_folder_path="build/xml",
        docs_folder_path=None,
        api_folder_path=None,
        base_url="/site/",
        compatibility_redirects_output_folder_path=None,
        verbose=True,
        debug=False,
    )
    options = build_options(args)
    assert options.doxygen_xml_input_folder_path == "build/xml"
    assert options.base_url == "/site/"
    assert options.docs_folder_path == "docs"
    assert options.verbose

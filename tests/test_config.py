"""Tests for ifexpr.config module."""

import os
import tempfile
from ifexpr.config import get_config, _reset_config


def test_default_config_when_no_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = get_config(config_dir=tmpdir)
    assert config["macro"]["module"] == "ifexpr.macro"
    assert config["build"]["output_suffix"] == ".expanded.py"
    assert config["logging"]["level"] == "WARNING"


def test_custom_config_overrides_defaults():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = os.path.join(tmpdir, "ifexpr.config")
        with open(config_path, "w") as f:
            f.write("macro:\n  module: mylib.branching\nlogging:\n  level: DEBUG\n")
        config = get_config(config_dir=tmpdir)
    assert config["macro"]["module"] == "mylib.branching"
    assert config["logging"]["level"] == "DEBUG"
    assert config["build"]["output_suffix"] == ".expanded.py"


def test_config_caching():
    with tempfile.TemporaryDirectory() as tmpdir:
        c1 = get_config(config_dir=tmpdir)
        c2 = get_config(config_dir=tmpdir)
    assert c1 is c2


def test_reset_config_clears_cache():
    with tempfile.TemporaryDirectory() as tmpdir:
        c1 = get_config(config_dir=tmpdir)
        _reset_config()
        c2 = get_config(config_dir=tmpdir)
    assert c1 is not c2


def test_deep_merge_preserves_nested_defaults():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = os.path.join(tmpdir, "ifexpr.config")
        with open(config_path, "w") as f:
            f.write("build:\n  output_suffix: _out.py\n")
        config = get_config(config_dir=tmpdir)
    assert config["build"]["output_suffix"] == "_out.py"
    assert config["macro"]["module"] == "ifexpr.macro"


def test_empty_config_file_uses_defaults():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = os.path.join(tmpdir, "ifexpr.config")
        with open(config_path, "w") as f:
            f.write("")
        config = get_config(config_dir=tmpdir)
    assert config["macro"]["module"] == "ifexpr.macro"


def test_transformer_uses_configured_module():
    from ifexpr.transformer import transform_source

    with tempfile.TemporaryDirectory() as tmpdir:
        with open(os.path.join(tmpdir, "ifexpr.config"), "w") as f:
            f.write("macro:\n  module: mylib.branching\n")
        get_config(config_dir=tmpdir)
    out = transform_source("from mylib.branching import If\nx = If(c).end()\n")
    assert out == "x = None if c else None\n"

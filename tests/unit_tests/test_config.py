"""Test the config.py module."""

import os
from io import StringIO

import mock
import pytest

from pyec2lib.config import ec2_section, parse_config


def test_get_item_override():
    """Test the __getitem__ method override."""
    config = parse_config(StringIO(""))
    with pytest.raises(KeyError) as exc_info:
        config["not_there"]
    assert str(exc_info.value) == (
        "'not_there must be defined in pyec2lib.toml to make this call'"
    )


class TestParseConfig:
    """Test the parse_config function in config.py."""

    @mock.patch("toml.load")
    def test_argument_priority(self, m_load):
        """Test that config argument gets evaluated over files."""
        parse_config(StringIO(""))
        assert len(m_load.call_args_list) == 1
        assert "StringIO" in str(m_load.call_args_list)

    @mock.patch("toml.load")
    def test_env_var_priority(self, m_load, monkeypatch):
        """Test that env var argument gets evaluated over files."""
        monkeypatch.setenv("PYEC2LIB_CONFIG", "/some/path")
        parse_config()
        assert len(m_load.call_args_list) == 1
        assert "/some/path" in str(m_load.call_args_list)

    @mock.patch("toml.load", side_effect=FileNotFoundError)
    def test_try_order(self, m_load, monkeypatch):
        """Test order of config file checking."""
        monkeypatch.setenv("PYEC2LIB_CONFIG", "/some/path")
        with pytest.raises(ValueError):
            parse_config(StringIO(""))
        expected_order = [
            "StringIO",
            "/some/path",
            ".config/pyec2lib.toml",
            "/etc/pyec2lib.toml",
        ]
        for expected, actual in zip(expected_order, m_load.call_args_list):
            assert expected in str(actual)

    @mock.patch("toml.load", side_effect=FileNotFoundError)
    def test_missing_ok(self, m_load):
        """Test that a missing file gives an empty configuration."""
        assert parse_config(missing_ok=True) == {}
        assert len(m_load.call_args_list) == 2

    def test_invalid_toml(self):
        with pytest.raises(ValueError, match="Could not parse"):
            parse_config(StringIO("[ec2\n"))


class TestEC2Section:
    """Test the ec2_section function in config.py."""

    def test_reads_ec2_table(self):
        config = ec2_section(
            StringIO('[ec2]\nregion = "us-east-2"\npoll_interval_ms = 250\n')
        )
        assert config["region"] == "us-east-2"
        assert config["poll_interval_ms"] == 250
        assert os.environ.get("PYEC2LIB_CONFIG") is None

    def test_missing_table(self):
        config = ec2_section(StringIO('[other]\nkey = "value"\n'))
        assert config == {}
        with pytest.raises(KeyError, match="region must be defined"):
            config["region"]

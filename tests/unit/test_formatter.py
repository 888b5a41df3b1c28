"""Tests for output formatting."""

from __future__ import annotations

from io import StringIO
from unittest.mock import patch

import pytest
from rich.console import Console

from openshift_client.output.formatter import output, output_csv, output_yaml
from openshift_client.output.tables import kv_table, make_table
from openshift_client.resources.cartridge import Cartridge, CartridgeType


def _capture():
    buf = StringIO()
    return buf, Console(file=buf, force_terminal=False, width=200)


class TestOutputJson:
    def test_pydantic_models_in_list(self):
        buf, console = _capture()
        with patch("openshift_client.output.formatter.console", console):
            output([Cartridge(name="php-5.3", type=CartridgeType.STANDALONE)], "json")
        out = buf.getvalue()
        assert '"php-5.3"' in out
        assert '"standalone"' in out

    def test_empty_list(self):
        output([], "json")


class TestOutputYaml:
    def test_dict(self):
        buf, console = _capture()
        with patch("openshift_client.output.formatter.console", console):
            output_yaml({"name": "myapp", "aliases": ["www.example.com"]})
        out = buf.getvalue()
        assert "name: myapp" in out
        assert "- www.example.com" in out


class TestOutputCsv:
    def test_csv_output(self):
        buf, console = _capture()
        with patch("openshift_client.output.formatter.console", console):
            output_csv(["Name", "Port"], [["java", 4447], ["mysql", None]])
        out = buf.getvalue()
        assert "Name,Port" in out
        assert "java,4447" in out
        assert "mysql," in out


class TestOutputTable:
    def test_columns_rows(self):
        buf, console = _capture()
        with patch("openshift_client.output.formatter.console", console):
            output([], "table", columns=["A", "B"], rows=[["1", "2"]], title="Test")
        assert "Test" in buf.getvalue()

    def test_dict_as_kv(self):
        buf, console = _capture()
        with patch("openshift_client.output.formatter.console", console):
            output({"aliases": ["a.test", "b.test"], "url": None}, "table")
        assert "a.test, b.test" in buf.getvalue()

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown output format"):
            output({}, "xml")


class TestTables:
    def test_make_table(self):
        buf, console = _capture()
        console.print(make_table("Ports", ["Name", "Port"], [["java", 4447], ["x", None]]))
        out = buf.getvalue()
        assert "Ports" in out
        assert "4447" in out

    def test_kv_table_none_values(self):
        buf, console = _capture()
        console.print(kv_table({"key": None}))
        assert "key" in buf.getvalue()

    def test_cells_render_flags_and_nested_values(self):
        buf, console = _capture()
        console.print(
            kv_table({"scalable": False, "proxy": {"host": "proxy.test", "port": 3128, "user": None}})
        )
        out = buf.getvalue()
        assert "no" in out
        assert "host=proxy.test, port=3128" in out

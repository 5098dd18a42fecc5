import json
from argparse import Namespace

import pytest

from sort_json import get_parser, main, sort_json


def test_sort_top_level_keys(tmp_path):
    inpath = tmp_path / "in.json"
    outpath = tmp_path / "out.json"
    inpath.write_text('{"b": {"y": 1, "x": 2}, "a": 1, // comment\n}', encoding="utf-8")

    sort_json(inpath, outpath)

    result = json.loads(outpath.read_text(encoding="utf-8"))
    assert list(result) == ["a", "b"]
    assert list(result["b"]) == ["y", "x"]


def test_sort_recursive(tmp_path):
    inpath = tmp_path / "in.json"
    outpath = tmp_path / "out.json"
    inpath.write_text('{"b": {"y": 1, "x": 2}, "a": [{"d": 1, "c": 2}]}', encoding="utf-8")

    sort_json(inpath, outpath, recursive=True)

    result = json.loads(outpath.read_text(encoding="utf-8"))
    assert list(result["b"]) == ["x", "y"]
    assert list(result["a"][0]) == ["c", "d"]


def test_sort_array_property(tmp_path):
    inpath = tmp_path / "in.json"
    outpath = tmp_path / "out.json"
    inpath.write_text('[{"name": "b", "z": 0, "a": 0}, {"name": "a"}]', encoding="utf-8")

    sort_json(inpath, outpath, array_property="name")

    result = json.loads(outpath.read_text(encoding="utf-8"))
    assert [item["name"] for item in result] == ["a", "b"]
    assert list(result[1]) == ["name", "z", "a"]


def test_array_property_needs_array(tmp_path):
    inpath = tmp_path / "in.json"
    inpath.write_text('{"a": 1}', encoding="utf-8")

    with pytest.raises(ValueError):
        sort_json(inpath, tmp_path / "out.json", array_property="name")


def test_main_exit_codes(tmp_path):
    inpath = tmp_path / "in.json"
    inpath.write_text("[1, ", encoding="utf-8")
    args = Namespace(inpath=inpath, outpath=tmp_path / "out.json", recursive=False, array_property=None, verbose=False)
    assert main(args) == 1

    inpath.write_text('{"b": 1, "a": 2}', encoding="utf-8")
    assert main(args) == 0
    assert list(json.loads(args.outpath.read_text(encoding="utf-8"))) == ["a", "b"]


def test_parser_requires_existing_input(tmp_path):
    with pytest.raises(SystemExit):
        get_parser().parse_args([str(tmp_path / "missing.json"), str(tmp_path / "out.json")])

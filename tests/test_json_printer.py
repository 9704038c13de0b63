import pytest
from parsers.common import ParserArgs
from parsers.lenientJson.lenientJson_parser import Ok, parse
from lang_json.json_printer import *
from lang_json.json_value import *

def test_render_scalars():
    assert render(Int(-3)) == "-3"
    assert render(Float(2.5)) == "2.5"
    assert render(String('a"b\n')) == '"a\\"b\\n"'

def test_render_containers():
    v = Object({"k": Array([Int(1), String("x")])})
    assert render(v) == '{"k": [1, "x"]}'

@pytest.mark.parametrize("value", [
    Int(42),
    Float(1e16),
    Float(-0.25),
    String("tab\tnul\0bell\a slash\\ quote\" ctl\x01"),
    Array([]),
    Array([Int(1), Array([Float(2.5), String("")]), Object({})]),
    Object({"a": Int(1), "b\n": Object({"c": Array([String("d")])})}),
])
def test_render_then_parse(value):
    text = render(value)
    assert parse(text) == Ok(value, len(text))

def test_render_then_parse_literals():
    value = Array([Null(), Bool(True), Object({"f": Bool(False)})])
    text = render(value)
    assert parse(text, ParserArgs(literals=True)) == Ok(value, len(text))

def test_print_value(capsys):
    printValue(Array([Int(1), Int(2)]))
    assert capsys.readouterr().out == "[1, 2]\n"

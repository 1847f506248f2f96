import logging

import pytest

from zgen.generators import (
    DocGenerator,
    KeysGenerator,
    OptionsGenerator,
    PhpGenerator,
    ToStringMapGenerator,
    WrapperGenerator,
)
from zgen.goparser import parse_struct
from zgen.model import Field, Struct
from zgen.registry import get_generator

SS_SOURCE = '''package strct_test

type SS struct {
	A *int    `json:"a" validate:"required"`
	B float64 `json:"b" validate:"exists"`
}
'''

OPTIONS_SOURCE = '''package options_test

type Options struct {
	A *int    `json:"a" validate:"required"`
	B float64 `json:"b" validate:"exists"`
}

type Option func(opts *Options)
'''


@pytest.fixture
def ss():
    return parse_struct(SS_SOURCE, "SS")


def test_doc(ss):
    out = DocGenerator().gen(ss)
    assert out == (
        "| 参数名| 类型  |  是否必须    |备注|\n"
        "| ---- | ---- | ---- | ---- |\n"
        "|a|int|required| |\n"
        "|b|float64|exists| |\n"
    )
    assert ss.fields[0].type == "*int"


def test_options():
    st = parse_struct(OPTIONS_SOURCE, "Options")
    out = OptionsGenerator().gen(st)
    assert out == (
        "func (opts *Options) Update(opt ...Option) {\n"
        "\tfor _, o := range opt {\n"
        "\t\to(opts)\n"
        "\t}\n"
        "}\n"
        "func WithA(v *int) Option {\n"
        "\treturn func(opts *Options) {\n"
        "\t\topts.A = v\n"
        "\t}\n"
        "}\n"
        "func WithB(v float64) Option {\n"
        "\treturn func(opts *Options) {\n"
        "\t\topts.B = v\n"
        "\t}\n"
        "}\n"
    )


def test_php(ss):
    assert PhpGenerator().gen(ss) == "\"SS\"=>[\n'a'=>'int',\n'b'=>'float64',\n],"


@pytest.mark.parametrize(
    "typ,expected",
    [
        ("*float64", "double"),
        ("[]string", "[]string"),
        ("map[string]interface {}", "map"),
        ("[]int", "[]int"),
        ("[]uint64", "[]int"),
        ("*uint64", "int"),
        ("*string", "string"),
    ],
)
def test_php_type_mapping(typ, expected):
    st = Struct(type="T", fields=[Field(name="X", type=typ, tag='json:"x,omitempty"')])
    assert PhpGenerator().gen(st) == f"\"T\"=>[\n'x'=>'{expected}',\n],"


def test_keys(ss):
    out = KeysGenerator().gen(ss)
    assert out == (
        "var KeysGenerator = set.Set{\n"
        '\t"a": collections.Empty{},\n'
        '\t"b": collections.Empty{},\n'
        "}\n"
        "var NeedTransformIntKey = set.Set{\n"
        '\t"a": collections.Empty{},\n'
        "}\n"
        "\n"
        "var NeedTransformUint64Key = set.Set{}\n"
        "\n"
        "var NeedTransformFloat64Key = set.Set{\n"
        '\t"b": collections.Empty{},\n'
        "}\n"
    )


def test_keys_aligns_values():
    st = Struct(type="T", fields=[
        Field(name="A", type="*uint64", tag='json:"a"'),
        Field(name="B", type="*uint64", tag='json:"bb"'),
    ])
    out = KeysGenerator().gen(st)
    assert '\t"a":  collections.Empty{},\n\t"bb": collections.Empty{},\n' in out
    assert "var NeedTransformIntKey = set.Set{}\n" in out


def test_wrapper(ss):
    out = WrapperGenerator().gen(ss)
    assert out == (
        "func (sS *SS) EmptyA() bool {\n"
        "\treturn sS.A == nil\n"
        "}\n"
        "func (sS *SS) GetA() (ret int) {\n"
        "\tif sS.A == nil {\n"
        "\t\treturn\n"
        "\t}\n"
        "\treturn *sS.A\n"
        "}\n"
        "func (sS *SS) SetA(v int) {\n"
        "\tsS.A = &v\n"
        "}\n"
        "func (sS *SS) EmptyB() bool {\n"
        "\treturn sS.B == nil\n"
        "}\n"
        "func (sS *SS) GetB() (ret float64) {\n"
        "\tif sS.B == nil {\n"
        "\t\treturn\n"
        "\t}\n"
        "\treturn *sS.B\n"
        "}\n"
        "func (sS *SS) SetB(v float64) {\n"
        "\tsS.B = &v\n"
        "}\n"
    )


def test_wrapper_reference_types():
    st = Struct(receiver="t", type="T", fields=[Field(name="M", type="map[string]int")])
    out = WrapperGenerator().gen(st)
    assert "\treturn t.M\n" in out
    assert "\tt.M = v\n" in out
    assert "*t.M" not in out


def test_mapping(ss):
    out = ToStringMapGenerator().gen(ss)
    assert out == (
        "func (sS *SS) Output() map[string]string {\n"
        "\tret := make(map[string]string, 2)\n"
        "\tif !sS.EmptyA() {\n"
        '\t\tret["a"] = strconv.Itoa(sS.GetA())\n'
        "\t}\n"
        "\tif !sS.EmptyB() {\n"
        "\t\tret[\"b\"] = strconv.FormatFloat(sS.GetB(), 'f', -1, 64)\n"
        "\t}\n"
        "\treturn ret\n"
        "}\n"
        "func (sS SS) MarshalJSON() ([]byte, error) {\n"
        "\treturn json.Marshal(sS.Output())\n"
        "}\n"
    )


def test_mapping_string_uint_and_unsupported(caplog):
    st = Struct(receiver="t", type="T", fields=[
        Field(name="Id", type="*uint64"),
        Field(name="Name", type="string", tag='json:"name,omitempty"'),
        Field(name="List", type="[]int", tag='json:"list"'),
    ])
    with caplog.at_level(logging.WARNING):
        out = ToStringMapGenerator().gen(st)
    assert '\t\tret["Id"] = strconv.FormatUint(t.GetId(), 10)\n' in out
    assert '\t\tret["name"] = t.GetName()\n' in out
    assert "List" not in out
    assert "unsupport tp:[]int" in caplog.text


@pytest.mark.parametrize(
    "name,cls",
    [
        ("doc", DocGenerator),
        ("options", OptionsGenerator),
        ("php", PhpGenerator),
        ("struct_keys", KeysGenerator),
        ("struct2map", ToStringMapGenerator),
        ("struct_wrapper", WrapperGenerator),
    ],
)
def test_registered(name, cls):
    expected = cls().gen(parse_struct(SS_SOURCE, "SS"))
    assert get_generator(name).gen(parse_struct(SS_SOURCE, "SS")) == expected


def test_unknown_generator():
    with pytest.raises(KeyError):
        get_generator("no_such_generator")
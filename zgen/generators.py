"""Code generators that render text from a parsed struct."""

from __future__ import annotations

import logging

from .model import Field, Struct
from .registry import Generator, register
from .utils import format_source, is_value_type

logger = logging.getLogger(__name__)


def _strip_pointer(typ: str) -> str:
    return typ[1:] if typ.startswith("*") else typ


def _json_name(field: Field) -> str:
    return field.tag.get("json").split(",")[0]


class DocGenerator(Generator):
    """Render a Markdown table documenting the JSON parameters."""

    def gen(self, struct: Struct) -> str:
        lines = [
            "| 参数名| 类型  |  是否必须    |备注|\n",
            "| ---- | ---- | ---- | ---- |\n",
        ]
        lines.extend(
            f"|{_json_name(f)}|{_strip_pointer(f.type)}|{f.tag.get('validate')}| |\n"
            for f in struct.fields
        )
        return "".join(lines)


class OptionsGenerator(Generator):
    """Render functional-option setters for every field."""

    def gen(self, struct: Struct) -> str:
        parts = [
            f"func (opts *{struct.type}) Update(opt ...Option) {{\n",
            "for _, o := range opt {\n",
            "o(opts)\n",
            "}\n",
            "}\n",
        ]
        for f in struct.fields:
            parts += [
                f"func With{f.name}(v {f.type}) Option {{\n",
                f"return func(opts *{struct.type}) {{\n",
                f"opts.{f.name} = v\n",
                "}\n",
                "}\n",
            ]
        return format_source("".join(parts))


_PHP_TYPES = {
    "*float64": "double",
    "map[string]interface {}": "map",
    "[]int": "[]int",
    "[]uint64": "[]int",
    "*uint64": "int",
    "*int": "int",
    "*string": "string",
}


class PhpGenerator(Generator):
    """Render a PHP array describing the JSON field types."""

    def gen(self, struct: Struct) -> str:
        parts = [f'"{struct.type}"=>[\n']
        for f in struct.fields:
            parts.append(f"'{_json_name(f)}'=>'{_PHP_TYPES.get(f.type, f.type)}',\n")
        parts.append("],")
        return "".join(parts)


def _key_set(name: str, keys: list[str]) -> str:
    if not keys:
        return f"var {name} = set.Set{{}}\n"
    entries = [f'"{key}":' for key in keys]
    width = max(len(entry) for entry in entries)
    body = "".join(f"{entry.ljust(width)} collections.Empty{{}},\n" for entry in entries)
    return f"var {name} = set.Set{{\n{body}}}\n"


class KeysGenerator(Generator):
    """Render key sets grouped by the numeric type of each field."""

    def gen(self, struct: Struct) -> str:
        all_keys: list[str] = []
        by_type: dict[str, list[str]] = {"int": [], "uint64": [], "float64": []}
        for f in struct.fields:
            name = _json_name(f)
            group = by_type.get(_strip_pointer(f.type))
            if group is not None:
                group.append(name)
            all_keys.append(name)
        text = (
            _key_set("KeysGenerator", all_keys)
            + _key_set("NeedTransformIntKey", by_type["int"])
            + "\n"
            + _key_set("NeedTransformUint64Key", by_type["uint64"])
            + "\n"
            + _key_set("NeedTransformFloat64Key", by_type["float64"])
        )
        return format_source(text)


_TO_STRING = {
    "int": "strconv.Itoa({get})",
    "uint64": "strconv.FormatUint({get}, 10)",
    "float64": "strconv.FormatFloat({get}, 'f', -1, 64)",
    "string": "{get}",
}


class ToStringMapGenerator(Generator):
    """Render an Output method mapping JSON names to string values."""

    def gen(self, struct: Struct) -> str:
        recv = struct.receiver
        parts = [
            f"func ({recv} *{struct.type}) Output() map[string]string {{\n",
            f"ret := make(map[string]string, {len(struct.fields)})\n",
        ]
        for f in struct.fields:
            json_name = _json_name(f) or f.name
            field_type = _strip_pointer(f.type)
            conversion = _TO_STRING.get(field_type)
            if conversion is None:
                logger.warning("unsupport tp:%s", field_type)
                continue
            value = conversion.format(get=f"{recv}.Get{f.name}()")
            parts += [
                f"if !{recv}.Empty{f.name}() {{\n",
                f'ret["{json_name}"] = {value}\n',
                "}\n",
            ]
        parts += [
            "return ret\n",
            "}\n",
            f"func ({recv} {struct.type}) MarshalJSON() ([]byte, error) {{\n",
            f"return json.Marshal({recv}.Output())\n",
            "}\n",
        ]
        return format_source("".join(parts))


class WrapperGenerator(Generator):
    """Render Empty, Get and Set accessors for pointer fields."""

    def gen(self, struct: Struct) -> str:
        recv, typ = struct.receiver, struct.type
        parts: list[str] = []
        for f in struct.fields:
            field_type = _strip_pointer(f.type)
            by_value = is_value_type(field_type)
            ref = f"{recv}.{f.name}"
            parts += [
                f"func ({recv} *{typ}) Empty{f.name}() bool {{\n",
                f"return {ref} == nil\n",
                "}\n",
                f"func ({recv} *{typ}) Get{f.name}() (ret {field_type}) {{\n",
                f"if {ref} == nil {{\n",
                "return\n",
                "}\n",
                f"return *{ref}\n" if by_value else f"return {ref}\n",
                "}\n",
                f"func ({recv} *{typ}) Set{f.name}(v {field_type}) {{\n",
                f"{ref} = &v\n" if by_value else f"{ref} = v\n",
                "}\n",
            ]
        return format_source("".join(parts))


register("doc", DocGenerator())
register("options", OptionsGenerator())
register("php", PhpGenerator())
register("struct_keys", KeysGenerator())
register("struct2map", ToStringMapGenerator())
register("struct_wrapper", WrapperGenerator())
"""Data model describing a parsed struct: fields, tags and methods."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field

_TAG_PAIR = re.compile(r' *([^\x00-\x20:"\x7f]+):("(?:\\.|[^"\\])*")')


class StructTag(str):
    """A struct field tag such as ``json:"a" validate:"required"``."""

    def get(self, key: str) -> str:
        """Return the value stored under ``key``, or an empty string."""
        pos = 0
        while match := _TAG_PAIR.match(self, pos):
            pos = match.end()
            if match.group(1) == key:
                try:
                    return json.loads(match.group(2))
                except ValueError:
                    return ""
        return ""


@dataclass
class Field:
    """A named struct field."""

    receiver: str = ""
    name: str = ""
    type: str = ""
    tag: StructTag = field(default_factory=StructTag)

    def __post_init__(self) -> None:
        self.tag = StructTag(self.tag)


@dataclass
class Param:
    """A function parameter or result."""

    name: str = ""
    type: str = ""


@dataclass
class Func:
    """A method signature."""

    name: str = ""
    inputs: list[Param] = field(default_factory=list)
    outputs: list[Param] = field(default_factory=list)


@dataclass
class Struct:
    """A struct type with its package, receiver name, fields and methods."""

    package: str = ""
    receiver: str = ""
    type: str = ""
    fields: list[Field] = field(default_factory=list)
    funcs: list[Func] = field(default_factory=list)

    def __str__(self) -> str:
        lines = [
            "-----package-----", self.package,
            "-----struct-----", f"{self.receiver} {self.type}",
            "-----field-----",
        ]
        lines += [f"{f.name}\t{f.type}\t{f.tag}" for f in self.fields]
        lines.append("-----func-----")
        for fun in self.funcs:
            lines += [f"{fun.name}:", "-----in-----"]
            lines += [f"{p.name}\t{p.type}" for p in fun.inputs]
            lines.append("-----out-----")
            lines += [f"{p.name}\t{p.type}" for p in fun.outputs]
        return "\n".join(lines) + "\n"


def to_camel_case(name: str) -> str:
    """Turn a type name into a lower camel case identifier."""
    parts = [p for p in re.split(r"[_\-\s]+", name) if p]
    if not parts:
        return ""
    first, rest = parts[0], parts[1:]
    return first[0].lower() + first[1:] + "".join(p[0].upper() + p[1:] for p in rest)
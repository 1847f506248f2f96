"""Helpers shared by the generators."""

from __future__ import annotations

import re

_LITERALS = re.compile(r'"(?:\\.|[^"\\])*"|\'(?:\\.|[^\'\\])*\'|`[^`]*`|//.*')


def is_value_type(type_name: str) -> bool:
    """Report whether a type is held by value rather than by reference."""
    return not type_name.startswith(("map", "[]"))


def format_source(source: str) -> str:
    """Re-indent generated code by bracket depth and tidy blank lines."""
    out: list[str] = []
    depth = 0
    for line in (raw.strip() for raw in source.splitlines()):
        if not line:
            if out and out[-1]:
                out.append("")
            continue
        code = _LITERALS.sub("", line)
        indent = depth - (len(code) - len(code.lstrip("})")))
        depth += sum(ch in "{(" for ch in code) - sum(ch in "})" for ch in code)
        if indent < 0 or depth < 0:
            raise ValueError("unbalanced brackets in source")
        out.append("\t" * indent + line)
    if depth != 0:
        raise ValueError("unbalanced brackets in source")
    while out and not out[-1]:
        out.pop()
    return "\n".join(out) + "\n" if out else ""
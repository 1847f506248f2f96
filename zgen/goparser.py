"""Extract a struct declaration from Go source text."""

from __future__ import annotations

import re
from pathlib import Path

from .model import Field, Struct, to_camel_case


class GoSyntaxError(ValueError):
    """Raised when the source cannot be read as Go."""


_TOKEN_RE = re.compile(
    r"""
    (?P<skip>[ \t\r]+|//[^\n]*|/\*.*?\*/)
  | (?P<nl>\n)
  | (?P<string>`[^`]*`|"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*')
  | (?P<word>[^\W\d]\w*|\.?\d[\w.]*)
  | (?P<op>\.\.\.|[-+*/%&|^<>=!:]=?|[(){}\[\],;.~])
    """,
    re.VERBOSE | re.DOTALL,
)
_OPEN, _CLOSE = set("([{"), set(")]}")


def _tokenize(source: str) -> list[tuple[str, str]]:
    tokens = []
    pos = 0
    while pos < len(source):
        match = _TOKEN_RE.match(source, pos)
        if match is None:
            raise GoSyntaxError(f"unexpected character {source[pos]!r} at offset {pos}")
        pos = match.end()
        kind, text = match.lastgroup, match.group()
        if kind == "skip":
            if "\n" in text:
                tokens.append(("nl", "\n"))
        else:
            tokens.append((kind, text))
    return tokens


def _after_close(toks: list[str], start: int) -> int:
    """Return the index just past the bracket matching the one at ``start``."""
    depth = 0
    for i, tok in enumerate(toks[start:], start):
        depth += (tok in _OPEN) - (tok in _CLOSE)
        if depth == 0:
            return i + 1
    raise GoSyntaxError("unbalanced brackets in type")


def _render(toks: list[str], i: int) -> tuple[str, int]:
    """Render the type starting at ``toks[i]`` and return it with the next index."""
    if i >= len(toks):
        return "", i
    tok = toks[i]
    if tok == "*":
        inner, j = _render(toks, i + 1)
        return "*" + inner, j
    if tok == "[":
        inner, j = _render(toks, _after_close(toks, i))
        return "[]" + inner, j
    if tok == "map":
        key, j = _render(toks, i + 2)
        value, j = _render(toks, j + 1)
        return f"map[{key}]{value}", j
    if tok == "interface":
        return "interface{}", _after_close(toks, i + 1)
    if tok in ("struct", "func", "chan", "(", "<"):
        return "", len(toks)
    if tok.isidentifier():
        if toks[i + 1:i + 2] == ["."]:
            return f"{tok}.{toks[i + 2]}", i + 3
        if toks[i + 1:i + 2] == ["["]:
            return "", _after_close(toks, i + 1)
        return tok, i + 1
    raise GoSyntaxError(f"unexpected {tok!r} in type")


def _find_struct(tokens: list[tuple[str, str]], name: str) -> int | None:
    """Return the index after ``{`` of the type spec ``name struct {``."""
    braces = parens = 0
    group = None
    prev = ""
    for i, (kind, text) in enumerate(tokens):
        if text == "{":
            braces += 1
        elif text == "}":
            braces -= 1
        elif text == "(":
            parens += 1
            if prev == "type" and braces == 0:
                group = parens
        elif text == ")":
            if group == parens:
                group = None
            parens -= 1
        elif kind == "word" and text == name and braces == 0:
            in_group = group == parens and prev in ("\n", ";", "(")
            if (prev == "type" or in_group) and tokens[i + 1:i + 3] == [
                ("word", "struct"), ("op", "{")
            ]:
                return i + 3
        prev = text
    return None


def _body_lines(tokens: list[tuple[str, str]], start: int):
    """Yield the tokens of each field line of the struct body."""
    depth = 0
    line: list[tuple[str, str]] = []
    for kind, text in tokens[start:]:
        if depth == 0 and text in ("\n", ";"):
            yield line
            line = []
            continue
        if kind == "op" and text in _OPEN:
            depth += 1
        elif kind == "op" and text in _CLOSE:
            depth -= 1
            if depth < 0:
                yield line
                return
        if kind != "nl":
            line.append((kind, text))
    raise GoSyntaxError("unterminated struct")


def _field(line: list[tuple[str, str]], receiver: str) -> Field | None:
    tag = ""
    if line and line[-1][0] == "string" and line[-1][1][0] in '`"':
        tag = line[-1][1][1:-1]
        line = line[:-1]
    texts = [text for _, text in line]
    if len(texts) < 2 or line[0][0] != "word" or texts[1] == ".":
        return None  # embedded fields are not described
    i = 1
    while i < len(texts) and texts[i] == ",":
        i += 2
    type_name, _ = _render(texts, i)
    return Field(receiver=receiver, name=texts[0], type=type_name, tag=tag)


def parse_struct(source: str, struct_name: str) -> Struct:
    """Parse Go ``source`` and describe the struct type named ``struct_name``."""
    tokens = _tokenize(source)
    words = [tok for tok in tokens if tok[0] != "nl"]
    if len(words) < 2 or words[0] != ("word", "package"):
        raise GoSyntaxError("missing package clause")
    out = Struct(package=words[1][1])
    start = _find_struct(tokens, struct_name)
    if start is None:
        return out
    out.type = struct_name
    out.receiver = to_camel_case(struct_name)
    for line in _body_lines(tokens, start):
        fld = _field(line, out.receiver)
        if fld is not None:
            out.fields.append(fld)
    return out


def parse_file(filename, struct_name: str) -> Struct:
    """Read a Go file and describe the struct type named ``struct_name``."""
    return parse_struct(Path(filename).read_text(encoding="utf-8"), struct_name)
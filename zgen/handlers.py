"""Validation rule handlers producing Go conditions and error expressions."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .model import Field

_NUMBER_TYPES = frozenset({
    "uint", "uint8", "uint16", "uint32", "uint64",
    "int", "int8", "int16", "int32", "int64",
    "float32", "float64",
})
_BASE_TYPES = _NUMBER_TYPES | {"string"}
_LEN_TYPES = frozenset({"string", "[]byte"})


class HandlerError(ValueError):
    """Raised when a validate tag cannot be turned into a check."""


def _go_list(items) -> str:
    return "[" + " ".join(items) + "]"


def _strip_pointer(typ: str) -> str:
    return typ[1:] if typ.startswith("*") else typ


class Handler(ABC):
    """One validation rule: checks a field type and renders a condition."""

    @abstractmethod
    def check(self, typ: str) -> bool:
        """Report whether the rule applies to a field of type ``typ``."""

    @abstractmethod
    def handle(self, field_name: str, *args: str) -> tuple[str, str]:
        """Return the failing condition and the error expression."""

    @staticmethod
    def _single(field_name, args, condition, message):
        if len(args) != 1:
            return "false", f'fmt.Errorf("{_go_list(args)} must len 1")'
        value = args[0]
        return (
            condition.format(name=field_name, value=value),
            f'fmt.Errorf("{field_name} must be {message.format(value=value)}")',
        )


class NumberHandler(Handler, ABC):
    """A rule that applies to numeric fields."""

    def check(self, typ: str) -> bool:
        return bool(typ) and _strip_pointer(typ) in _NUMBER_TYPES


class LengthHandler(Handler, ABC):
    """A rule that applies to fields with a length."""

    def check(self, typ: str) -> bool:
        return bool(typ) and _strip_pointer(typ) in _LEN_TYPES


class Gt(NumberHandler):
    def handle(self, field_name, *args):
        return self._single(field_name, args, "{name} < {value}", "greater than {value}")


class Gte(NumberHandler):
    def handle(self, field_name, *args):
        return self._single(
            field_name, args, "{name} < {value}", "greater than or equal to {value}"
        )


class Lt(NumberHandler):
    def handle(self, field_name, *args):
        return self._single(field_name, args, "{name} >= {value}", "less than {value}")


class Lte(NumberHandler):
    def handle(self, field_name, *args):
        return self._single(
            field_name, args, "{name} > {value}", "less than or equal to {value}"
        )


class Range(NumberHandler):
    def handle(self, field_name, *args):
        if len(args) != 1:
            return "false", f'fmt.Errorf("{_go_list(args)} must len 1")'
        bounds = args[0].split(",")
        if len(bounds) != 2:
            return "false", f'fmt.Errorf("{_go_list(bounds)} must len 2")'
        low, high = bounds
        return (
            f"{field_name} <= {low} || {field_name} >= {high}",
            f'fmt.Errorf("{field_name} must be between {low} and {high}")',
        )


class MinLen(LengthHandler):
    def handle(self, field_name, *args):
        return self._single(
            field_name, args, "len({name}) < {value}", "at least {value} characters long"
        )


class MaxLen(LengthHandler):
    def handle(self, field_name, *args):
        return self._single(
            field_name, args, "len({name}) > {value}", "at most {value} characters long"
        )


class Len(LengthHandler):
    def handle(self, field_name, *args):
        return self._single(
            field_name, args, "len({name}) != {value}", "{value} characters long"
        )


class Child(Handler):
    def check(self, typ):
        return True

    def handle(self, field_name, *args):
        return (
            f"err := {field_name}.Validate(); err != nil",
            f'fmt.Errorf("{field_name} must validate err: %w", err)',
        )


_handlers: dict[str, Handler] = {}


def register_handler(name: str, handler: Handler) -> None:
    """Register ``handler`` for the tag rule ``name``."""
    _handlers[name] = handler


def get_handler(name: str) -> Handler | None:
    """Return the handler for rule ``name``, or None."""
    return _handlers.get(name)


for _name, _handler in (
    ("gt", Gt()), ("gte", Gte()), ("lt", Lt()), ("lte", Lte()),
    ("range", Range()), ("min_len", MinLen()), ("max_len", MaxLen()),
    ("len", Len()), ("child", Child()),
):
    register_handler(_name, _handler)


def field_expression(field: Field) -> str:
    """Return the Go expression reading ``field`` through its receiver."""
    name = f"{field.receiver}.{field.name}"
    if field.type.startswith("*") and field.type[1:] in _BASE_TYPES:
        return "*" + name
    return name


def build_check(field: Field, tag: str, skip_error: bool) -> tuple[str, str]:
    """Turn one rule such as ``range=3,7`` into (condition, error expression).

    With ``skip_error`` a failure becomes a check that always reports the
    problem instead of raising :class:`HandlerError`.
    """
    try:
        expr = field_expression(field)
        func_name, sep, param = tag.partition("=")
        if not func_name:
            raise HandlerError(f"{expr}'tag {tag} must be in format")
        handler = get_handler(func_name)
        if handler is None:
            raise HandlerError(f"{expr}'tag {tag} not found handler")
        if not handler.check(field.type):
            raise HandlerError(f"// {field.name}: {field.type} check error")
        return handler.handle(expr, param) if sep else handler.handle(expr)
    except HandlerError as exc:
        if not skip_error:
            raise
        return "false", f'fmt.Errorf("{exc}")'
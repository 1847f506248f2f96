"""Registry of named code generators."""

from __future__ import annotations

from .model import Struct


class Generator:
    """Turns a parsed struct into generated text."""

    def gen(self, struct: Struct) -> str:
        """Generate code for ``struct``."""
        raise NotImplementedError


_generators: dict[str, Generator] = {}


def register(name: str, generator: Generator) -> None:
    """Register ``generator`` under ``name``, replacing any earlier one."""
    _generators[name] = generator


def get_generator(name: str) -> Generator:
    """Return the generator registered under ``name``."""
    if name not in _generators:
        raise KeyError(f"unknown generator type: {name!r}")
    return _generators[name]
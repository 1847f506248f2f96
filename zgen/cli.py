"""Command line entry point: parse a Go struct and print generated code."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

from . import generators  # noqa: F401  (registers the generators)
from .goparser import parse_file
from .registry import get_generator

HEADER = "\n// generate by z_gen\n\n"


@dataclass
class Config:
    """Options given on the command line."""

    typ: str = ""
    filename: str = ""
    struct_name: str = ""
    output: str = ""
    inplace: bool = False


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="z_gen", allow_abbrev=False)
    parser.add_argument("-filename", "--filename", "-f", dest="filename", default="",
                        help="filename")
    parser.add_argument("-structname", "--structname", "-s", dest="struct_name", default="",
                        help="structname")
    parser.add_argument("-output", "--output", "-o", dest="output", default="",
                        help="output")
    parser.add_argument("-inplace", "--inplace", dest="inplace", action="store_true",
                        help="inplace")
    parser.add_argument("-tp", "--tp", dest="typ", default="", help="gen type")
    return parser


def parse_args(argv=None) -> Config:
    """Parse command line arguments into a :class:`Config`."""
    ns = _build_parser().parse_args(argv)
    return Config(
        typ=ns.typ,
        filename=ns.filename,
        struct_name=ns.struct_name,
        output=ns.output,
        inplace=ns.inplace,
    )


def main(argv=None) -> int:
    """Run the generator and write its output; return the exit status."""
    cfg = parse_args(argv)
    if not cfg.filename or not cfg.struct_name:
        _build_parser().print_usage(sys.stderr)
        return 255
    try:
        generator = get_generator(cfg.typ)
    except KeyError as exc:
        print(exc.args[0], file=sys.stderr)
        return 1
    struct = parse_file(cfg.filename, cfg.struct_name)
    text = HEADER + generator.gen(struct)
    if cfg.inplace:
        with open(cfg.filename, "a", encoding="utf-8") as fh:
            print(text, file=fh)
    elif cfg.output:
        with open(cfg.output, "w", encoding="utf-8") as fh:
            print(text, file=fh)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
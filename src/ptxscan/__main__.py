#!/usr/bin/env python3
"""Ptxscan CLI - Dump the declarations of a ptx module.

Usage:
    ptxscan <file.ptx>                  # List declarations
    ptxscan <file.ptx> --params         # Include decoded parameters
    ptxscan <file.ptx> --body           # Include function bodies
    ptxscan <file.ptx> --preamble       # Show only the preamble
    ptxscan <file.ptx> --lark           # Show Lark trees for directives
    ptxscan <file.ptx> --rich           # Summary table
"""

import argparse
import logging
import pathlib
import sys

from lark import Token, Tree

import ptxscan
from ptxscan._grammar import parse_slice


def prettylark(node, indent=0):
    """Pretty-print a Lark parse tree."""
    prefix = "  " * indent

    if isinstance(node, Token):
        print(f"{prefix}{node.type}: {node.value!r}")

    elif isinstance(node, Tree):
        if len(node.children) == 0:
            print(f"{prefix}{node.data}()")
        elif len(node.children) == 1 and isinstance(node.children[0], Token):
            # Compact single-token nodes
            print(f"{prefix}{node.data}: {node.children[0].value!r}")
        else:
            print(f"{prefix}{node.data}:")
            for child in node.children:
                prettylark(child, indent + 1)


def format_preamble(preamble):
    targets = ", ".join(str(t) for t in preamble.targets)
    text = f".version {preamble.version} .target {targets}"
    if preamble.address_size is not None:
        text += f" .address_size {preamble.address_size}"
    return text


def format_declaration(decl, params=False, body=False):
    """Format a Function or Global as lines of text."""
    line, column = decl_span(decl).line_column
    lines = []
    if isinstance(decl, ptxscan.Function):
        sig = decl.signature
        kind = ".entry" if sig.entry else ".func"
        flags = " visible" if sig.visible else ""
        extra = "" if decl.body is not None else " (declaration)"
        lines.append(f"{line}:{column} {kind}{flags} {sig.name}{extra}")
        if sig.return_value is not None:
            lines.append(f"    returns ({sig.return_value.raw_string})")
        if params and sig.parameters is not None:
            for param in sig.parameters.params:
                lines.append(f"    {param.ty:<8} {param.size:>3}  {param.name}")
        if body and decl.body is not None:
            lines.append("    {")
            for text in str(decl.body.body).strip("\n").splitlines():
                lines.append(f"    {text}")
            lines.append("    }")
    else:
        dims = "".join("[]" if d is None else f"[{d}]" for d in decl.dims)
        linkage = f"{decl.linkage} " if decl.linkage is not None else ""
        lines.append(f"{line}:{column} {linkage}{decl.state_space} {decl.ty} {decl.name}{dims}")
        if decl.initializer is not None:
            lines.append(f"    = {decl.initializer}")
    return lines


def decl_span(decl):
    if isinstance(decl, ptxscan.Function):
        return decl.signature.name
    return decl.name


def show_rich(ptx):
    """Render a summary table of the module."""
    import rich.console, rich.table

    table = rich.table.Table(title=format_preamble(ptx.preamble))
    table.add_column("Line", justify="right")
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("Params", justify="right")
    table.add_column("Param bytes", justify="right")
    for decl in ptx.declarations:
        line, _ = decl_span(decl).line_column
        if isinstance(decl, ptxscan.Function):
            sig = decl.signature
            params = sig.parameters.params if sig.parameters is not None else []
            kind = ".entry" if sig.entry else ".func"
            table.add_row(str(line), kind, str(sig.name), str(len(params)),
                str(sum(p.size for p in params)))
        else:
            table.add_row(str(line), str(decl.state_space), str(decl.name), "", "")
    rich.console.Console().print(table)


def show_lark(source, ptx):
    """Show the lark trees for the preamble and every global."""
    raw = ptx.preamble.raw_string
    print("preamble")
    prettylark(parse_slice("preamble", source, raw.start, raw.end), 1)
    for decl in ptx.globals:
        raw = decl.raw_string
        print(f"global {decl.name}")
        prettylark(parse_slice("global", source, raw.start, raw.end), 1)


def report_error(error, source, filename):
    if error.position is None:
        print(f"{filename}: {error.message}", file=sys.stderr)
        return
    line, column = ptxscan.line_column(source, error.position)
    print(f"{filename}:{line}:{column}: {error.message}", file=sys.stderr)
    lines = source.splitlines()
    if 0 < line <= len(lines):
        print(f"  | {lines[line - 1]}", file=sys.stderr)
        print(f"  | {' ' * (column - 1)}^", file=sys.stderr)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="ptxscan",
        description="Dump the declarations of a ptx module")
    parser.add_argument("source",
        help="Ptx file to parse")
    parser.add_argument("--text", action="store_true",
        help="Treat source as direct module text")
    parser.add_argument("--preamble", action="store_true",
        help="Show only the preamble")
    parser.add_argument("--params", action="store_true",
        help="Include decoded function parameters")
    parser.add_argument("--body", action="store_true",
        help="Include function bodies")
    parser.add_argument("--lark", action="store_true",
        help="Show Lark parse trees for the preamble and globals")
    parser.add_argument("--rich", action="store_true",
        help="Render a summary table with rich")
    parser.add_argument("--verbose", action="store_true",
        help="Enable debug logging")

    args = parser.parse_args(argv)
    if args.rich and args.lark:
        parser.error("--rich cannot be combined with --lark")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.text:
        source = args.source
        filename = "<text>"
    else:
        filepath = pathlib.Path(args.source)
        source = filepath.read_text(encoding="utf-8")
        filename = str(filepath)

    try:
        cursor = ptxscan.PtxParser(source)
        if args.preamble:
            print(format_preamble(cursor.preamble))
            return 0
        ptx = ptxscan.PtxFile.from_parser(cursor)
    except (ptxscan.ParseError, ptxscan.DecodeError) as e:
        report_error(e, source, filename)
        return 1

    if args.lark:
        show_lark(source, ptx)
    elif args.rich:
        show_rich(ptx)
    else:
        print(format_preamble(ptx.preamble))
        for decl in ptx.declarations:
            for line in format_declaration(decl, params=args.params, body=args.body):
                print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())

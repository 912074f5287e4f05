"""Find service types in Go sources for server stub generation.

A type counts as a service when its name is exported and a top-level function
declared after it has the shape ``func ...(ctx context.Context, a, b) error``.
"""

from __future__ import annotations

import os
import re

_NOISE = re.compile(r"//[^\n]*|/\*.*?\*/|`[^`]*`|\"(?:\\.|[^\"\\\n])*\"|'(?:\\.|[^'\\\n])+'", re.S)
_TOP = re.compile(r"^[ \t]*(type|func)\b|[()\[\]{}]", re.M)
_PACKAGE = re.compile(r"\s*package\s+([^\W\d]\w*)")
_IDENT = re.compile(r"\s*([^\W\d]\w*)")
_NAMED = re.compile(r"([^\W\d]\w*)\s+(\S.*)", re.S)
_WS = re.compile(r"\s*")
_HSPACE = re.compile(r"[ \t]*")
_PAIRS = {"(": ")", "[": "]", "{": "}"}
_KEYWORDS = frozenset({"chan", "func", "map", "struct", "interface"})


def is_exported(name: str) -> bool:
    """Tell whether a Go identifier is exported, that is, starts upper case."""
    return name[:1].isupper()


def _strip(source: str) -> str:
    def repl(m: re.Match) -> str:
        text = m.group()
        if text.startswith(("//", "/*")):
            return "\n" if "\n" in text else " "
        return '""'

    return _NOISE.sub(repl, source)


def _close(text: str, start: int) -> int:
    stack: list[str] = []
    for i, ch in enumerate(text[start:], start):
        if ch in _PAIRS:
            stack.append(_PAIRS[ch])
        elif ch in ")]}":
            if not stack or stack.pop() != ch:
                raise ValueError(f"unexpected {ch!r}")
            if not stack:
                return i
    raise ValueError("unbalanced brackets")


def _split(text: str, seps: str) -> list[str]:
    parts, current, depth = [], [], 0
    for ch in text:
        depth += (ch in _PAIRS) - (ch in ")]}")
        if depth == 0 and ch in seps:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


def _compact(text: str) -> str:
    return "".join(text.split())


def _fields(text: str) -> tuple[int, str]:
    """Return the number of fields and the type of the first field group."""
    entries = _split(text, ",")
    named = [m.group(2) for m in map(_NAMED.fullmatch, entries) if m and m.group(1) not in _KEYWORDS]
    first = named[0] if named else entries[0] if entries else ""
    return len(entries), _compact(first)


def _skip_brackets(text: str, i: int, opener: str) -> int:
    if text.startswith(opener, i):
        i = _close(text, i) + 1
    return _WS.match(text, i).end()


def _parse_func(text: str, i: int):
    i = _skip_brackets(text, _WS.match(text, i).end(), "(")
    m = _IDENT.match(text, i)
    if not m:
        raise ValueError("expected function name")
    i = _skip_brackets(text, _WS.match(text, m.end()).end(), "[")
    if not text.startswith("(", i):
        raise ValueError("expected parameter list")
    close = _close(text, i)
    params = _fields(text[i + 1 : close])
    i = _HSPACE.match(text, close + 1).end()
    if text.startswith("(", i):
        close = _close(text, i)
        results, i = _fields(text[i + 1 : close]), close + 1
    else:
        end = i
        while end < len(text) and text[end] not in "{\n;":
            end = (_close(text, end) if text[end] in "([" else end) + 1
        results = (1, _compact(text[i:end])) if text[i:end].strip() else (0, "")
        i = end
    i = _HSPACE.match(text, i).end()
    if text.startswith("{", i):
        i = _close(text, i) + 1
    return params, results, i


def _type_names(text: str, i: int) -> tuple[list[str], int]:
    i = _WS.match(text, i).end()
    if text.startswith("(", i):
        close = _close(text, i)
        lines = _split(text[i + 1 : close], "\n;")
        return [m.group(1) for m in map(_IDENT.match, lines) if m], close + 1
    m = _IDENT.match(text, i)
    if not m:
        raise ValueError("expected type name")
    return [m.group(1)], m.end()


def _package_name(text: str) -> str:
    m = _PACKAGE.match(text)
    if not m:
        raise ValueError("expected 'package'")
    return m.group(1)


class Parser:
    """Collects the package name and service type names of Go sources."""

    def __init__(self, pkg_full_name: str = "") -> None:
        self.pkg_path = ""
        self.pkg_name = ""
        self.pkg_full_name = pkg_full_name
        self.struct_names: dict[str, bool] = {}

    def _walk(self, source: str, name: str) -> str:
        text = _strip(source)
        self.pkg_name = _package_name(text)
        depth, pos = 0, _PACKAGE.match(text).end()
        while m := _TOP.search(text, pos):
            tok, pos = m.group(1) or m.group(), m.end()
            if tok in _PAIRS:
                depth += 1
            elif tok in ")]}":
                depth -= 1
                if depth < 0:
                    raise ValueError(f"unexpected {tok!r}")
            elif depth == 0 and tok == "type":
                names, pos = _type_names(text, pos)
                name = names[-1] if names else name
            elif depth == 0 and tok == "func":
                (n_params, first), results, pos = _parse_func(text, pos)
                if is_exported(name) and n_params == 3 and results == (1, "error"):
                    if first == "context.Context":
                        self.struct_names[name] = True
        if depth:
            raise ValueError("unbalanced brackets")
        return name

    def parse(self, fname: str, is_dir: bool) -> None:
        """Parse a Go file, or every ``.go`` file in a directory.

        Raises ValueError on source that cannot be parsed and OSError when a
        file cannot be read.
        """
        self.pkg_path = os.environ.get("GOPATH") or os.path.join(os.path.expanduser("~"), "go")
        if not is_dir:
            with open(fname, encoding="utf-8") as handle:
                self._walk(handle.read(), "")
            return
        packages: dict[str, list[str]] = {}
        for entry in sorted(os.listdir(fname)):
            path = os.path.join(fname, entry)
            if entry.endswith(".go") and os.path.isfile(path):
                with open(path, encoding="utf-8") as handle:
                    source = handle.read()
                packages.setdefault(_package_name(_strip(source)), []).append(source)
        for pkg in sorted(packages):
            name = ""
            for source in packages[pkg]:
                name = self._walk(source, name)
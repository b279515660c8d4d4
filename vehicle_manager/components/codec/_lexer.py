"""
Lua tokenizer for the codec component.

Produces tokens lazily so the decoder can stop as soon as it has what it
needs; text after the vehicles table is never scanned.

Handles:
- names and keywords
- numbers (decimal, hex, fractions, exponents)
- short strings with Lua escapes
- long strings and long comments ([[...]], [==[...]==])
- line comments
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal

from .models import LuaSyntaxError

TokenKind = Literal["name", "number", "string", "op", "eof"]

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_HEX_RE = re.compile(r"0[xX][0-9a-fA-F]*(?:\.[0-9a-fA-F]*)?(?:[pP][+-]?[0-9]+)?")
_DEC_RE = re.compile(r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_LONG_OPEN_RE = re.compile(r"\[(=*)\[")
_WS_RE = re.compile(r"[ \t\r\n\f\v]+")
_UNICODE_ESC_RE = re.compile(r"\{([0-9a-fA-F]+)\}")
_DECIMAL_ESC_RE = re.compile(r"[0-9]{1,3}")

_OPERATORS = ("...", "..", "==", "~=", "<=", ">=", "//", "::", "<<", ">>")

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "\n": "\n",
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    line: int
    start: int
    end: int

    def is_op(self, op: str) -> bool:
        return self.kind == "op" and self.value == op

    def is_name(self, name: str) -> bool:
        return self.kind == "name" and self.value == name


class Lexer:
    """Scan Lua source into tokens, one at a time."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.line = 1

    def _advance_to(self, end: int) -> None:
        self.line += self.source.count("\n", self.pos, end)
        self.pos = end

    def _skip_trivia(self) -> None:
        src = self.source
        while self.pos < len(src):
            ws = _WS_RE.match(src, self.pos)
            if ws:
                self._advance_to(ws.end())
                continue
            if src.startswith("--", self.pos):
                long_open = _LONG_OPEN_RE.match(src, self.pos + 2)
                if long_open:
                    self._read_long_bracket(long_open, what="comment")
                else:
                    eol = src.find("\n", self.pos)
                    self._advance_to(len(src) if eol < 0 else eol)
                continue
            return

    def _read_long_bracket(self, opener: re.Match[str], what: str) -> str:
        close = "]" + opener.group(1) + "]"
        body_start = opener.end()
        body_end = self.source.find(close, body_start)
        if body_end < 0:
            raise LuaSyntaxError(f"unfinished long {what}", self.line)
        body = self.source[body_start:body_end]
        # A newline right after the opening bracket is not part of the string
        if body.startswith("\r\n"):
            body = body[2:]
        elif body.startswith("\n"):
            body = body[1:]
        self._advance_to(body_end + len(close))
        return body

    def _read_short_string(self) -> str:
        src = self.source
        quote = src[self.pos]
        i = self.pos + 1
        out: list[str] = []
        while True:
            if i >= len(src) or src[i] == "\n":
                raise LuaSyntaxError("unfinished string", self.line)
            ch = src[i]
            if ch == quote:
                i += 1
                break
            if ch != "\\":
                out.append(ch)
                i += 1
                continue

            # Escape sequence
            if i + 1 >= len(src):
                raise LuaSyntaxError("unfinished string", self.line)
            esc = src[i + 1]
            if esc in _SIMPLE_ESCAPES:
                out.append(_SIMPLE_ESCAPES[esc])
                i += 2
            elif esc == "\r":
                out.append("\n")
                i += 3 if src[i + 2 : i + 3] == "\n" else 2
            elif esc == "z":
                i += 2
                while i < len(src) and src[i] in " \t\r\n\f\v":
                    i += 1
            elif esc == "x":
                digits = src[i + 2 : i + 4]
                if not re.fullmatch(r"[0-9a-fA-F]{2}", digits):
                    raise LuaSyntaxError("hexadecimal digit expected", self.line)
                out.append(chr(int(digits, 16)))
                i += 4
            elif esc == "u":
                m = _UNICODE_ESC_RE.match(src, i + 2)
                if not m:
                    raise LuaSyntaxError("malformed \\u escape", self.line)
                out.append(chr(int(m.group(1), 16)))
                i = m.end()
            else:
                m = _DECIMAL_ESC_RE.match(src, i + 1)
                if not m:
                    raise LuaSyntaxError(f"invalid escape sequence '\\{esc}'", self.line)
                code = int(m.group(0))
                if code > 255:
                    raise LuaSyntaxError("decimal escape too large", self.line)
                out.append(chr(code))
                i = m.end()
        self._advance_to(i)
        return "".join(out)

    def next_token(self) -> Token:
        self._skip_trivia()
        src = self.source
        start = self.pos
        line = self.line
        if start >= len(src):
            return Token("eof", "", line, start, start)

        ch = src[start]

        if ch in "'\"":
            value = self._read_short_string()
            return Token("string", value, line, start, self.pos)

        if ch == "[":
            long_open = _LONG_OPEN_RE.match(src, start)
            if long_open:
                value = self._read_long_bracket(long_open, what="string")
                return Token("string", value, line, start, self.pos)

        m = _HEX_RE.match(src, start) or _DEC_RE.match(src, start)
        if m:
            self._advance_to(m.end())
            return Token("number", m.group(0), line, start, self.pos)

        m = _NAME_RE.match(src, start)
        if m:
            self._advance_to(m.end())
            return Token("name", m.group(0), line, start, self.pos)

        for op in _OPERATORS:
            if src.startswith(op, start):
                self._advance_to(start + len(op))
                return Token("op", op, line, start, self.pos)

        self._advance_to(start + 1)
        return Token("op", ch, line, start, self.pos)


def tokenize(source: str) -> Iterator[Token]:
    """Yield tokens up to and including the final ``eof`` token."""
    lexer = Lexer(source)
    while True:
        tok = lexer.next_token()
        yield tok
        if tok.kind == "eof":
            return

"""Read Lua table literals as written by KOReader.

KOReader stores per-book settings as a Lua chunk of the form
``return { ["key"] = value, ... }`` and the quote store as
``local quotes = { ... } return quotes``. Only this data subset of Lua is
understood: table constructors, strings, numbers, booleans, nil, ``local``
assignments and a final ``return``. Anything else raises LuaSyntaxError.

Tables whose keys are exactly 1..n decode to lists; every other table decodes
to a dict.
"""

import re
from pathlib import Path
from typing import Any

from .errors import LuaSyntaxError

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER_RE = re.compile(
    r"0[xX][0-9a-fA-F]+|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)
_LONG_BRACKET_RE = re.compile(r"\[(=*)\[")
_DECIMAL_ESCAPE_RE = re.compile(r"[0-9]{1,3}")
_UNICODE_ESCAPE_RE = re.compile(r"u\{([0-9a-fA-F]+)\}")

_SIMPLE_ESCAPES = {
    "a": b"\a",
    "b": b"\b",
    "f": b"\f",
    "n": b"\n",
    "r": b"\r",
    "t": b"\t",
    "v": b"\v",
    "\\": b"\\",
    '"': b'"',
    "'": b"'",
    "\n": b"\n",
}

_KEYWORDS = {"true": True, "false": False, "nil": None}


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.names: dict[str, Any] = {}

    def error(self, message: str) -> LuaSyntaxError:
        return LuaSyntaxError(message, self.pos)

    # Lexing helpers

    def skip_space(self):
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch in " \t\r\n\f\v":
                self.pos += 1
            elif text.startswith("--", self.pos):
                self.pos += 2
                match = _LONG_BRACKET_RE.match(text, self.pos)
                if match:
                    self.pos = match.end()
                    self.read_long_body(match.group(1))
                else:
                    end = text.find("\n", self.pos)
                    self.pos = len(text) if end == -1 else end + 1
            elif self.pos == 0 and text.startswith("#"):
                # shebang line
                end = text.find("\n")
                self.pos = len(text) if end == -1 else end + 1
            else:
                break

    def peek(self) -> str:
        self.skip_space()
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, token: str):
        self.skip_space()
        if not self.text.startswith(token, self.pos):
            raise self.error(f"expected {token!r}")
        self.pos += len(token)

    def accept(self, token: str) -> bool:
        self.skip_space()
        if self.text.startswith(token, self.pos):
            self.pos += len(token)
            return True
        return False

    def read_name(self) -> str | None:
        self.skip_space()
        match = _NAME_RE.match(self.text, self.pos)
        if not match:
            return None
        self.pos = match.end()
        return match.group()

    def read_long_body(self, level: str) -> str:
        closing = "]" + level + "]"
        end = self.text.find(closing, self.pos)
        if end == -1:
            raise self.error("unfinished long bracket")
        body = self.text[self.pos : end]
        self.pos = end + len(closing)
        return body

    # Values

    def read_string(self, quote: str) -> str:
        text = self.text
        self.pos += 1
        buf = bytearray()
        while True:
            if self.pos >= len(text):
                raise self.error("unfinished string")
            ch = text[self.pos]
            if ch == quote:
                self.pos += 1
                break
            if ch == "\n":
                raise self.error("unfinished string")
            if ch != "\\":
                buf += ch.encode("utf-8")
                self.pos += 1
                continue

            self.pos += 1
            esc = text[self.pos : self.pos + 1]
            if esc in _SIMPLE_ESCAPES:
                buf += _SIMPLE_ESCAPES[esc]
                self.pos += 1
            elif esc == "\r":
                buf += b"\n"
                self.pos += 2 if text.startswith("\r\n", self.pos) else 1
            elif esc and esc in "0123456789":
                match = _DECIMAL_ESCAPE_RE.match(text, self.pos)
                value = int(match.group())
                if value > 255:
                    raise self.error("decimal escape too large")
                buf.append(value)
                self.pos = match.end()
            elif esc == "x":
                digits = text[self.pos + 1 : self.pos + 3]
                if not re.fullmatch(r"[0-9a-fA-F]{2}", digits):
                    raise self.error("hexadecimal digit expected")
                buf.append(int(digits, 16))
                self.pos += 3
            elif esc == "z":
                self.pos += 1
                while self.pos < len(text) and text[self.pos].isspace():
                    self.pos += 1
            elif esc == "u":
                match = _UNICODE_ESCAPE_RE.match(text, self.pos)
                if not match:
                    raise self.error("malformed unicode escape")
                try:
                    buf += chr(int(match.group(1), 16)).encode("utf-8")
                except (ValueError, OverflowError):
                    raise self.error("invalid unicode code point") from None
                self.pos = match.end()
            else:
                raise self.error("invalid escape sequence")
        return buf.decode("utf-8", errors="replace")

    def read_number(self) -> int | float:
        match = _NUMBER_RE.match(self.text, self.pos)
        if not match:
            raise self.error("malformed number")
        self.pos = match.end()
        literal = match.group()
        if literal[:2] in ("0x", "0X"):
            return int(literal, 16)
        if any(c in literal for c in ".eE"):
            return float(literal)
        return int(literal)

    def read_table(self) -> dict | list:
        self.expect("{")
        result: dict[Any, Any] = {}
        index = 1
        while not self.accept("}"):
            if self.peek() == "[" and not _LONG_BRACKET_RE.match(self.text, self.pos):
                self.pos += 1
                key = self.read_value()
                self.expect("]")
                self.expect("=")
                value = self.read_value()
                if key is None:
                    raise self.error("table index is nil")
                if isinstance(key, (dict, list)):
                    raise self.error("table keys must be strings, numbers or booleans")
                if value is not None:
                    result[key] = value
            else:
                start = self.pos
                name = self.read_name()
                if name is not None and name not in _KEYWORDS and self.accept("="):
                    value = self.read_value()
                    if value is not None:
                        result[name] = value
                else:
                    self.pos = start
                    value = self.read_value()
                    if value is not None:
                        result[index] = value
                    index += 1
            if not (self.accept(",") or self.accept(";")):
                self.expect("}")
                break
        return _as_list(result)

    def read_value(self) -> Any:
        ch = self.peek()
        if ch == "{":
            return self.read_table()
        if ch in ("'", '"'):
            return self.read_string(ch)
        if ch == "[":
            match = _LONG_BRACKET_RE.match(self.text, self.pos)
            if match:
                self.pos = match.end()
                body = self.read_long_body(match.group(1))
                # a newline right after the opening bracket is not part of the string
                if body.startswith("\r\n"):
                    return body[2:]
                return body[1:] if body.startswith("\n") else body
        if ch == "-":
            self.pos += 1
            value = self.read_value()
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise self.error("unary minus on non-number")
            return -value
        if ch.isdigit() or (ch == "." and self.text[self.pos + 1 : self.pos + 2].isdigit()):
            return self.read_number()
        name = self.read_name()
        if name is None:
            raise self.error("unexpected symbol")
        if name in _KEYWORDS:
            return _KEYWORDS[name]
        if name in self.names:
            return self.names[name]
        raise self.error(f"unknown name {name!r}")

    # Chunk

    def read_chunk(self) -> Any:
        while True:
            name = self.read_name()
            if name is None:
                raise self.error("expected statement")
            if name == "return":
                if self.peek() in ("", ";"):
                    value = None
                else:
                    value = self.read_value()
                self.accept(";")
                if self.peek() != "":
                    raise self.error("'<eof>' expected after return")
                return value
            if name == "local":
                name = self.read_name()
                if name is None:
                    raise self.error("expected name after 'local'")
            self.expect("=")
            self.names[name] = self.read_value()
            self.accept(";")
            if self.peek() == "":
                return None


def _as_list(table: dict) -> dict | list:
    if table and all(isinstance(k, int) and not isinstance(k, bool) for k in table):
        if sorted(table) == list(range(1, len(table) + 1)):
            return [table[i] for i in range(1, len(table) + 1)]
    return table


def loads(text: str) -> Any:
    """Evaluate a Lua data chunk and return the value it returns.

    Raises:
        LuaSyntaxError: If the text is not a supported Lua data chunk
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    return _Parser(text).read_chunk()


def load_file(file_path: Path) -> Any:
    """Read and evaluate a Lua data file.

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not UTF-8
        LuaSyntaxError: If the contents are not a supported Lua data chunk
    """
    return loads(Path(file_path).read_text(encoding="utf-8"))

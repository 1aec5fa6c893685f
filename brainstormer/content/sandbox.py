"""Restricted evaluator for data-only script modules.

Last-resort strategy for list sources that are real ES or CommonJS modules
rather than bare JSON: unquoted keys, single-quoted strings, trailing commas,
comments, ``const`` bindings referenced by a later ``export default``, and so
on. Nothing is executed. The evaluator understands data literals and a handful
of binding statements, and the ``module``/``exports``/``window`` globals are
plain dictionaries owned by the sandbox. Anything else raises
:class:`UnparseableSource`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import UnparseableSource

logger = logging.getLogger(__name__)

_PUNCT = set("{}[](),:;=.")
_IDENT_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_NUMBER_RE = re.compile(
    r"0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII
)
_DIGITS = "0123456789"
_SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0",
}
_CONSTANTS = {
    "true": True, "false": False, "null": None, "undefined": None,
    "NaN": float("nan"), "Infinity": float("inf"),
}
_DECLARATIONS = ("const", "let", "var")
# Globals a module may write to; all of them resolve to sandbox-owned objects.
_HOST_GLOBALS = ("window", "globalThis", "global", "self")
# Call wrappers that return their argument unchanged.
_IDENTITY_CALLS = {("Object", "freeze")}


@dataclass(slots=True)
class Token:
    kind: str  # "punct" | "ident" | "string" | "number" | "eof"
    value: Any
    pos: int


def tokenize(text: str) -> List[Token]:
    tokens: List[Token] = []
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if text.startswith("//", i):
            nl = text.find("\n", i)
            i = n if nl == -1 else nl + 1
            continue
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise UnparseableSource(f"unterminated comment at {i}")
            i = end + 2
            continue
        if ch in "\"'`":
            value, i_next = _read_string(text, i)
            tokens.append(Token("string", value, i))
            i = i_next
            continue
        if ch in _DIGITS or (ch == "." and i + 1 < n and text[i + 1] in _DIGITS):
            m = _NUMBER_RE.match(text, i)
            if m is None:
                raise UnparseableSource(f"bad number at {i}")
            raw = m.group(0)
            if raw[:2] in ("0x", "0X"):
                value: Any = int(raw, 16)
            elif raw.isdigit():
                value = int(raw)
            else:
                value = float(raw)
            tokens.append(Token("number", value, i))
            i = m.end()
            continue
        m = _IDENT_RE.match(text, i)
        if m:
            tokens.append(Token("ident", m.group(0), i))
            i = m.end()
            continue
        if ch in _PUNCT or ch in "-+":
            tokens.append(Token("punct", ch, i))
            i += 1
            continue
        raise UnparseableSource(f"unexpected character {ch!r} at {i}")
    tokens.append(Token("eof", None, n))
    return tokens


def _read_string(text: str, start: int) -> tuple[str, int]:
    quote = text[start]
    out: List[str] = []
    i, n = start + 1, len(text)
    while i < n:
        ch = text[i]
        if ch == quote:
            return "".join(out), i + 1
        if quote == "`" and text.startswith("${", i):
            raise UnparseableSource(f"template substitution at {i}")
        if ch == "\n" and quote != "`":
            break
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        esc = text[i + 1] if i + 1 < n else ""
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
            i += 2
        elif esc == "x":
            out.append(chr(int(text[i + 2:i + 4], 16)))
            i += 4
        elif esc == "u" and text.startswith("{", i + 2):
            end = text.index("}", i + 3)
            out.append(chr(int(text[i + 3:end], 16)))
            i = end + 1
        elif esc == "u":
            out.append(chr(int(text[i + 2:i + 6], 16)))
            i += 6
        elif esc == "\n":
            i += 2  # line continuation
        else:
            out.append(esc)
            i += 2
    raise UnparseableSource(f"unterminated string at {start}")


@dataclass
class ModuleSandbox:
    """Evaluation context for a single module text.

    ``module.exports`` and ``exports`` start out as the same dictionary, so
    ``exports.default = ...`` is visible through ``module.exports.default``
    until ``module.exports`` is reassigned.
    """
    bindings: Dict[str, Any] = field(default_factory=dict)
    default_export: Any = None

    def __post_init__(self) -> None:
        exports: Dict[str, Any] = {}
        self.bindings["exports"] = exports
        self.bindings["module"] = {"exports": exports}
        host: Dict[str, Any] = {}
        for name in _HOST_GLOBALS:
            self.bindings[name] = host
        self._tokens: List[Token] = []
        self._pos = 0

    # ----------------------------------------------------------------- API
    def evaluate(self, text: str) -> Optional[Any]:
        """Run *text* and return the exported list (or ``None``)."""
        self._tokens = tokenize(text)
        self._pos = 0
        while self._peek().kind != "eof":
            self._statement()
        return self.exported_list()

    def exported_list(self) -> Optional[List[Any]]:
        module_exports = self.bindings["module"].get("exports")
        exports = self.bindings["exports"]
        candidates = [
            module_exports,
            module_exports.get("default") if isinstance(module_exports, dict) else None,
            exports.get("default"),
            self.default_export,
        ]
        for value in candidates:
            if isinstance(value, list):
                return value
        for value in (self.default_export, module_exports):
            if isinstance(value, dict):
                for item in value.values():
                    if isinstance(item, list):
                        return item
        return None

    # ------------------------------------------------------------- parsing
    def _peek(self, offset: int = 0) -> Token:
        return self._tokens[min(self._pos + offset, len(self._tokens) - 1)]

    def _next(self) -> Token:
        tok = self._peek()
        self._pos += 1
        return tok

    def _is(self, value: str, offset: int = 0) -> bool:
        tok = self._peek(offset)
        return tok.kind in ("punct", "ident") and tok.value == value

    def _expect(self, value: str) -> Token:
        tok = self._next()
        if tok.value != value or tok.kind not in ("punct", "ident"):
            raise UnparseableSource(f"expected {value!r} at {tok.pos}, got {tok.value!r}")
        return tok

    def _ident(self) -> str:
        tok = self._next()
        if tok.kind != "ident":
            raise UnparseableSource(f"expected identifier at {tok.pos}")
        return tok.value

    def _end_statement(self) -> None:
        if self._is(";"):
            self._next()

    def _statement(self) -> None:
        tok = self._peek()
        if self._is(";"):
            self._next()
            return
        if tok.kind == "string":
            # Directive prologue such as "use strict".
            self._next()
            self._end_statement()
            return
        if tok.kind == "ident" and tok.value in _DECLARATIONS:
            self._next()
            self._declarations()
            return
        if tok.kind == "ident" and tok.value == "export":
            self._next()
            self._export()
            return
        if tok.kind == "ident":
            self._assignment()
            return
        raise UnparseableSource(f"unsupported statement at {tok.pos}")

    def _declarations(self, exported: bool = False) -> None:
        while True:
            name = self._ident()
            value = None
            if self._is("="):
                self._next()
                value = self._expression()
            self.bindings[name] = value
            if exported:
                self.bindings["exports"][name] = value
            if not self._is(","):
                break
            self._next()
        self._end_statement()

    def _export(self) -> None:
        if self._is("default"):
            self._next()
            self.default_export = self._expression()
            self._end_statement()
            return
        if self._peek().value in _DECLARATIONS:
            self._next()
            self._declarations(exported=True)
            return
        if self._is("{"):
            self._next()
            while not self._is("}"):
                local = self._ident()
                public = local
                if self._is("as"):
                    self._next()
                    public = self._ident()
                value = self._lookup(local, self._peek().pos)
                if public == "default":
                    self.default_export = value
                else:
                    self.bindings["exports"][public] = value
                if self._is(","):
                    self._next()
            self._expect("}")
            self._end_statement()
            return
        raise UnparseableSource(f"unsupported export at {self._peek().pos}")

    def _assignment(self) -> None:
        pos = self._peek().pos
        path = [self._ident()]
        while self._is(".") or self._is("["):
            path.append(self._member_key())
        self._expect("=")
        value = self._expression()
        self._end_statement()
        if len(path) == 1:
            self.bindings[path[0]] = value
            return
        target = self._lookup(path[0], pos)
        for key in path[1:-1]:
            target = self._member(target, key, pos)
        if isinstance(target, dict):
            target[str(path[-1])] = value
        elif isinstance(target, list) and isinstance(path[-1], int) and 0 <= path[-1] < len(target):
            target[path[-1]] = value
        else:
            raise UnparseableSource(f"cannot assign into {path!r} at {pos}")

    def _member_key(self) -> Any:
        if self._is("."):
            self._next()
            return self._ident()
        self._expect("[")
        key = self._expression()
        self._expect("]")
        return key

    def _member(self, target: Any, key: Any, pos: int) -> Any:
        if isinstance(target, dict):
            return target.get(str(key))
        if isinstance(target, list):
            if key == "length":
                return len(target)
            if isinstance(key, (int, float)) and 0 <= int(key) < len(target):
                return target[int(key)]
            return None
        raise UnparseableSource(f"member access on non-object at {pos}")

    def _lookup(self, name: str, pos: int) -> Any:
        if name in _CONSTANTS:
            return _CONSTANTS[name]
        if name not in self.bindings:
            raise UnparseableSource(f"unknown identifier {name!r} at {pos}")
        return self.bindings[name]

    # --------------------------------------------------------- expressions
    def _expression(self) -> Any:
        tok = self._next()
        if tok.kind in ("string", "number"):
            return tok.value
        if tok.kind == "punct":
            if tok.value == "[":
                return self._array()
            if tok.value == "{":
                return self._object()
            if tok.value == "(":
                value = self._expression()
                self._expect(")")
                return value
            if tok.value in "-+":
                value = self._expression()
                if not isinstance(value, (int, float)) or isinstance(value, bool):
                    raise UnparseableSource(f"unary {tok.value} on non-number at {tok.pos}")
                return -value if tok.value == "-" else value
        if tok.kind == "ident":
            return self._reference(tok)
        raise UnparseableSource(f"unexpected token {tok.value!r} at {tok.pos}")

    def _reference(self, tok: Token) -> Any:
        if self._is(".") and self._peek(1).kind == "ident" and self._is("(", 2):
            method = self._peek(1).value
            if (tok.value, method) in _IDENTITY_CALLS:
                self._pos += 3
                value = self._expression()
                self._expect(")")
                return value
        value = self._lookup(tok.value, tok.pos)
        while self._is(".") or self._is("["):
            value = self._member(value, self._member_key(), tok.pos)
        return value

    def _array(self) -> List[Any]:
        items: List[Any] = []
        while not self._is("]"):
            if self._is(","):
                # Elision: [a, , b]
                self._next()
                items.append(None)
                continue
            items.append(self._expression())
            if not self._is("]"):
                self._expect(",")
        self._expect("]")
        return items

    def _object(self) -> Dict[str, Any]:
        obj: Dict[str, Any] = {}
        while not self._is("}"):
            key_tok = self._next()
            if key_tok.kind == "ident" or key_tok.kind == "string":
                key = str(key_tok.value)
            elif key_tok.kind == "number":
                value = key_tok.value
                key = str(int(value)) if isinstance(value, float) and value.is_integer() else str(value)
            else:
                raise UnparseableSource(f"bad object key at {key_tok.pos}")
            if self._is(":"):
                self._next()
                obj[key] = self._expression()
            elif key_tok.kind == "ident":
                # Shorthand property: { items }
                obj[key] = self._lookup(key, key_tok.pos)
            else:
                raise UnparseableSource(f"expected ':' at {self._peek().pos}")
            if not self._is("}"):
                self._expect(",")
        self._expect("}")
        return obj


def evaluate_module(text: str) -> Optional[List[Any]]:
    """Evaluate *text* in a fresh sandbox and return its exported list."""
    sandbox = ModuleSandbox()
    try:
        result = sandbox.evaluate(text)
    except (ValueError, IndexError, KeyError, AttributeError, TypeError, OverflowError, RecursionError) as exc:
        # Malformed escapes, pathological nesting or values outside the data model.
        raise UnparseableSource(str(exc)) from exc
    logger.debug("sandbox exported %s", "nothing" if result is None else f"{len(result)} entries")
    return result

"""Best-effort identifier quoting.

The quoter is a tokenizer-level heuristic, not a parser.  Text is split on
single spaces and every token is either left alone or wrapped in the
dialect's identifier delimiters.  Anything ambiguous is left alone: keywords,
numbers, binding labels and placeholders, operators, string literals, and
tokens that already carry a delimiter.  Callers that need exact control over
a fragment turn quoting off with :meth:`Quoter.enable_quoting` while pushing it.

Field rules::

    id              -> "id"
    twd.Index       -> twd."Index"        (lower-case sides stay bare)
    (twd.Value      -> (twd."Value"
    count(*)        -> count(*)           (function names in one case stay bare)
    myFunc(x)       -> "myFunc"(x)
    :_b1_           -> :_b1_

Table rules: a token (or a dotted side) that is entirely lower-case is left
bare, everything else is wrapped::

    tableWithData twd  -> "tableWithData" twd
    public.Orders      -> public."Orders"
"""

from __future__ import annotations

import re
from collections.abc import Callable

from ._types import BIND_CHAR, BIND_MARKER
from .dialects.base import DialectRules

_NUMERIC_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_PUNCT_RE = re.compile(r"^(\(*)(.*?)([),]*)\Z", re.DOTALL)
_WORD_RE = re.compile(r"[^\W\d]\w*")

_LITERAL_QUOTE = "'"

_Wrap = Callable[[str], str]


class Quoter:
    """Wraps field and table identifiers in dialect delimiters."""

    def __init__(self, rules: DialectRules, *, enabled: bool = True) -> None:
        self._rules = rules
        self._enabled = enabled

    @property
    def rules(self) -> DialectRules:
        return self._rules

    def enable_quoting(self, flag: bool) -> Quoter:
        self._enabled = bool(flag)
        return self

    def is_enabled(self) -> bool:
        return self._enabled

    def copy(self) -> Quoter:
        """Return an independent quoter with the same rules and state."""
        return Quoter(self._rules, enabled=self._enabled)

    # -- fields -------------------------------------------------------------

    def quote_field(self, text: str) -> str:
        if not self._enabled:
            return text
        return " ".join(self._quote_field_token(part) for part in text.split(" "))

    def _quote_field_token(self, token: str) -> str:
        if self._skip_token(token, self._rules.field_open):
            return token

        lead, core, trail = _split_punctuation(token)
        if not core or self._skip_token(core, self._rules.field_open):
            return token

        if "." in core:
            quoted = self._quote_words(core, self._field_wrap)
        elif "(" in core:
            quoted = self._quote_callable(core, self._field_wrap)
        else:
            quoted = self._field_wrap(core)

        return lead + quoted + trail

    # -- tables -------------------------------------------------------------

    def quote_table(self, text: str) -> str:
        if not self._enabled:
            return text
        return " ".join(self._quote_table_token(part) for part in text.split(" "))

    def _quote_table_token(self, token: str) -> str:
        if not token or self._rules.table_open in token:
            return token
        if BIND_MARKER in token or BIND_CHAR in token or token.lower() in self._rules.keywords:
            return token

        if "(" in token:
            return self._quote_callable(token, self._table_wrap)
        return self._quote_words(token, self._table_wrap)

    # -- helpers ------------------------------------------------------------

    def _skip_token(self, token: str, open_quote: str) -> bool:
        if not token:
            return True
        if open_quote in token or _LITERAL_QUOTE in token:
            return True
        if token.lower() in self._rules.keywords:
            return True
        if _NUMERIC_RE.match(token):
            return True
        if BIND_MARKER in token or BIND_CHAR in token:
            return True
        return token in self._rules.symbols

    def _quote_words(self, text: str, wrap: _Wrap) -> str:
        """Wrap every identifier run in *text* that is not entirely lower-case."""

        def _replace(match: re.Match[str]) -> str:
            word = match.group(0)
            if text[match.end() : match.end() + 1] == "(":
                return _wrap_callable_name(word, wrap)
            if word == word.lower():
                return word
            return wrap(word)

        return _WORD_RE.sub(_replace, text)

    def _quote_callable(self, text: str, wrap: _Wrap) -> str:
        pos = text.index("(")
        name = text[:pos]
        if not name or not _WORD_RE.fullmatch(name):
            return text
        return _wrap_callable_name(name, wrap) + text[pos:]

    def _field_wrap(self, word: str) -> str:
        return f"{self._rules.field_open}{word}{self._rules.field_close}"

    def _table_wrap(self, word: str) -> str:
        return f"{self._rules.table_open}{word}{self._rules.table_close}"


def _split_punctuation(token: str) -> tuple[str, str, str]:
    """Peel leading ``(`` and trailing ``)``/``,`` off a token."""
    match = _PUNCT_RE.match(token)
    if match is None:  # pragma: no cover -- the pattern matches any string
        return "", token, ""
    lead, core, trail = match.groups()
    # Keep a call's closing parenthesis attached when it opened inside the core.
    if "(" in core and trail.startswith(")"):
        opened = core.count("(") - core.count(")")
        keep = min(opened, len(trail) - len(trail.lstrip(")")))
        core, trail = core + trail[:keep], trail[keep:]
    return lead, core, trail


def _wrap_callable_name(name: str, wrap: _Wrap) -> str:
    # SUM(...), count(...) are function calls; only mixed-case names are identifiers.
    if name == name.lower() or name == name.upper():
        return name
    return wrap(name)

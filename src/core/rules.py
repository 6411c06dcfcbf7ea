from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

PatternCompiler = Callable[[str], "re.Pattern[str]"]

_LITERAL = "literal"
_GROUP = "group"
_MATCH = "match"
_BEFORE = "before"
_AFTER = "after"

_SPECIAL_TOKENS = {"&": _MATCH, "`": _BEFORE, "'": _AFTER}


class InvalidPatternError(ValueError):
    def __init__(self, index: int, pattern: str, message: str) -> None:
        super().__init__(f"Invalid pattern at index {index} ('{pattern}'): {message}")
        self.index = index
        self.pattern = pattern
        self.message = message


_WORD = "A-Za-z0-9_"
_WORD_BEFORE = f"(?<=[{_WORD}])"
_NO_WORD_BEFORE = f"(?<![{_WORD}])"
_WORD_AFTER = f"(?=[{_WORD}])"
_NO_WORD_AFTER = f"(?![{_WORD}])"

# Rule patterns read \d, \w and \b as ASCII only while \s stays Unicode.
_ASCII_ESCAPES = {
    "d": "[0-9]",
    "D": "[^0-9]",
    "w": f"[{_WORD}]",
    "W": f"[^{_WORD}]",
    "b": f"(?:{_WORD_BEFORE}{_NO_WORD_AFTER}|{_NO_WORD_BEFORE}{_WORD_AFTER})",
    "B": f"(?:{_WORD_BEFORE}{_WORD_AFTER}|{_NO_WORD_BEFORE}{_NO_WORD_AFTER})",
}
_ASCII_CLASS_ESCAPES = {
    "d": "0-9",
    "D": r"\x00-\x2f\x3a-\U0010ffff",
    "w": _WORD,
    "W": r"\x00-\x2f\x3a-\x40\x5b-\x5e\x60\x7b-\U0010ffff",
}


def translate_pattern(source: str) -> str:
    """Rewrite the ``$``-dialect constructs that Python's ``re`` reads differently.

    ``(?<name>...)`` becomes ``(?P<name>...)``, an unescaped ``$`` outside a
    character class becomes ``\\Z`` so it only anchors at the very end of the
    text, ``\\d``, ``\\w``, ``\\b`` and their negations match ASCII only, ``[^]``
    matches any character and ``[]`` matches nothing.
    """
    out: list[str] = []
    in_class = False
    i = 0
    while i < len(source):
        ch = source[i]
        if ch == "\\":
            escape = source[i + 1 : i + 2]
            table = _ASCII_CLASS_ESCAPES if in_class else _ASCII_ESCAPES
            out.append(table.get(escape, source[i : i + 2]))
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
            out.append(ch)
            i += 1
            continue
        if source.startswith("[^]", i):
            out.append(r"[\s\S]")
            i += 3
            continue
        if source.startswith("[]", i):
            out.append("(?!)")
            i += 2
            continue
        if ch == "[":
            in_class = True
        elif source.startswith("(?<", i) and source[i + 3 : i + 4] not in ("=", "!", ""):
            out.append("(?P<")
            i += 3
            continue
        elif ch == "$":
            out.append(r"\Z")
            i += 1
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def compile_pattern(source: str) -> re.Pattern[str]:
    return re.compile(translate_pattern(source))


def parse_template(
    template: str,
    group_count: int,
    group_names: Sequence[str] = (),
) -> tuple[tuple[str, object], ...]:
    parts: list[tuple[str, object]] = []
    literal: list[str] = []

    def flush() -> None:
        if literal:
            parts.append((_LITERAL, "".join(literal)))
            literal.clear()

    i = 0
    size = len(template)
    while i < size:
        ch = template[i]
        if ch != "$" or i + 1 >= size:
            literal.append(ch)
            i += 1
            continue
        nxt = template[i + 1]
        if nxt == "$":
            literal.append("$")
            i += 2
            continue
        if nxt in _SPECIAL_TOKENS:
            flush()
            parts.append((_SPECIAL_TOKENS[nxt], None))
            i += 2
            continue
        if "0" <= nxt <= "9":
            two = template[i + 1 : i + 3]
            if len(two) == 2 and "0" <= two[1] <= "9" and 1 <= int(two) <= group_count:
                flush()
                parts.append((_GROUP, int(two)))
                i += 3
                continue
            if 1 <= int(nxt) <= group_count:
                flush()
                parts.append((_GROUP, int(nxt)))
                i += 2
                continue
        elif nxt == "<" and group_names:
            end = template.find(">", i + 2)
            if end != -1:
                name = template[i + 2 : end]
                # Unknown names expand to nothing.
                if name in group_names:
                    flush()
                    parts.append((_GROUP, name))
                i = end + 1
                continue
        literal.append(ch)
        i += 1
    flush()
    return tuple(parts)


def expand_template(parts: Sequence[tuple[str, object]], match: re.Match[str]) -> str:
    out: list[str] = []
    for kind, value in parts:
        if kind == _LITERAL:
            out.append(value)  # type: ignore[arg-type]
        elif kind == _GROUP:
            out.append(match.group(value) or "")  # type: ignore[arg-type]
        elif kind == _MATCH:
            out.append(match.group(0))
        elif kind == _BEFORE:
            out.append(match.string[: match.start()])
        else:
            out.append(match.string[match.end() :])
    return "".join(out)


@dataclass(frozen=True)
class Rule:
    source: str
    pattern: re.Pattern[str]
    replacer: str
    _parts: tuple[tuple[str, object], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        parts = parse_template(
            self.replacer,
            self.pattern.groups,
            tuple(self.pattern.groupindex),
        )
        object.__setattr__(self, "_parts", parts)

    def apply(self, text: str) -> str:
        return self.pattern.sub(lambda match: expand_template(self._parts, match), text)


def compile_rules(
    patterns: Sequence[str],
    replacers: Sequence[str],
    compiler: PatternCompiler = compile_pattern,
) -> list[Rule]:
    """Build the ordered rule list from parallel pattern and replacer lists.

    Only the first ``min(len(patterns), len(replacers))`` pairs become rules.
    The first pattern that fails to compile aborts the whole call with
    :class:`InvalidPatternError`.
    """
    rules: list[Rule] = []
    for index in range(min(len(patterns), len(replacers))):
        source = patterns[index]
        try:
            pattern = compiler(source)
        except re.error as exc:
            raise InvalidPatternError(index, source, str(exc)) from exc
        rules.append(Rule(source=source, pattern=pattern, replacer=replacers[index]))
    return rules


def apply_rules(rules: Sequence[Rule], source: str | None) -> str:
    if source is None:
        return ""
    result = source
    for rule in rules:
        result = rule.apply(result)
    return result

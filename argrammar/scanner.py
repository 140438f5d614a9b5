"""
Argrammar scanner: turn a token list into a ValueMap or a list of faults.

Algorithm
- lookups (built per call, never shared): value options and flags by alias, and the
  positionals as a tuple walked by a cursor with a per-positional match counter.
- single left-to-right pass, no backtracking; the first applicable rule wins:
  1. value option, two-token form:  -o value
  2. value option, delimited form:  -o:value / -o=value  (non-empty name and value)
  3. flag:                          -v
  4. positional:                    value  (does not start with the prefix)
  5. anything else is an unknown argument (reported only by strict grammars)
- post-scan resolution, in order:
  • flags not found record the "not given" sentinel;
  • value options not found record their default when they have one;
  • positionals never reached: optional repeated ones map to an empty tuple,
    required ones are missing;
  • value options not found and without a default are missing.

Faults keep discovery order: unknown arguments first, then missing options, then
missing positionals (declaration order).
"""
from collections import Counter
from types import MappingProxyType
from typing import NamedTuple

from .faults import UnknownArgumentError, MissingOptionError, MissingPositionalError


class Scan(NamedTuple):
    """
    Outcome of one scan.

    - values: the ValueMap (key -> tuple of raw strings) or None when there are faults.
    - faults: tuple of ParseFault, empty on success.
    """
    values: MappingProxyType | None
    faults: tuple

    @property
    def ok(self):
        return not self.faults


def _split(token, delimiters, /):
    """
    Split "name<delimiter>value" at the first delimiter character.

    Returns (name, value), or None when there is no delimiter or either side is empty.
    """
    for index, char in enumerate(token):
        if char in delimiters:
            name, value = token[:index], token[index + 1:]
            if name and value:
                return name, value
            return None
    return None


def scan(grammar, tokens, /):
    """
    Scan `tokens` against `grammar` and return a Scan.

    parameters
    - grammar: Grammar (read only; any number of scans may share it).
    - tokens: sequence of str, consumed left to right and never mutated.

    returns
    - Scan(values, ()) on success; Scan(None, faults) otherwise. The scan never
      stops early: every problem in the tokens is reported in the same call.
    """
    tokens = tuple(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("scan() tokens must be strings")

    prefix = grammar.prefix
    delimiters = grammar.delimiters
    given, missing = grammar.flags

    declared = tuple(grammar.options())
    options = {name: option for option in declared if not option.flag for name in option.names}
    flags = {name: option for option in declared if option.flag for name in option.names}
    positionals = tuple(grammar.positionals())

    cursor = 0
    matches = Counter()
    found = set()
    values = {}
    faults = []

    def record(key, value):
        values.setdefault(key, []).append(value)

    index = 0
    while index < len(tokens):
        token = tokens[index]

        # -o value
        if token in options and index + 1 < len(tokens) and not tokens[index + 1].startswith(prefix):
            option = options[token]
            record(option.key, tokens[index + 1])
            found.add(option)
            index += 2
            continue

        # -o[:=]value
        if (split := _split(token, delimiters)) and split[0] in options:
            option = options[split[0]]
            record(option.key, split[1])
            found.add(option)
            index += 1
            continue

        # -v
        if token in flags:
            option = flags[token]
            record(option.key, given)
            found.add(option)
            index += 1
            continue

        # value
        if not token.startswith(prefix) and cursor < len(positionals):
            positional = positionals[cursor]
            record(positional.key, token)
            matches[positional] += 1
            if not positional.repeated:
                cursor += 1
            index += 1
            continue

        if grammar.strict:
            faults.append(UnknownArgumentError(token))
        index += 1

    for option in declared:
        if option.flag and option not in found:
            record(option.key, missing)

    for option in declared:
        if not option.flag and option not in found and option.default is not None:
            record(option.key, option.default)

    absent = []
    for positional in positionals[cursor:]:
        if matches[positional]:
            continue
        if positional.optional and positional.repeated:
            values.setdefault(positional.key, [])
        elif not positional.optional:
            absent.append(MissingPositionalError(positional.name))

    for option in declared:
        if not option.flag and option not in found and option.default is None:
            faults.append(MissingOptionError(option.name))

    faults.extend(absent)

    if faults:
        return Scan(None, tuple(faults))
    return Scan(MappingProxyType({key: tuple(value) for key, value in values.items()}), ())


__all__ = (
    "Scan",
    "scan",
)

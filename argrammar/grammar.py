"""
Argrammar grammar: the ordered, validated registry of argument models.

What this module provides
- Grammar: an append-only collection of Positional, Option and Separator models.
  Every add() is validated against the grammar shape

      Option* Positional(required)* Positional(optional)* Positional(repeated)?

  and fails immediately (DuplicateArgumentError / InvalidOrderingError) on the
  offending declaration; a failed add() leaves the grammar unchanged.
- DEFAULTS: the process-wide conventions (prefix, delimiters, flag sentinels,
  strictness); every Grammar may override them through keyword arguments.

Conventions
- prefix: the single character marking option-like tokens ("-").
- delimiters: characters splitting "name<delimiter>value" tokens (":=").
- flags: (given, not_given) sentinel strings recorded for flags ("true", "false").
- strict: report unrecognized tokens as faults (True) or skip them (False).

Quick example:
    >>> grammar = Grammar()
    >>> grammar.option("-v").name("--verbose").key("verbose")
    >>> grammar.positional("infile").required().key("infile")
    >>> grammar.scan(["-v", "foo"]).values
    mappingproxy({'verbose': ('true',), 'infile': ('foo',)})
"""
from collections.abc import Sequence
from types import MappingProxyType

from .arguments import Positional, Option, Separator
from .builders import PositionalBuilder, OptionBuilder, SeparatorBuilder
from .faults import DuplicateArgumentError, InvalidOrderingError
from .scanner import scan
from .utils import *

DEFAULTS = MappingProxyType({
    "prefix": "-",
    "delimiters": ":=",
    "flags": ("true", "false"),
    "strict": True,
})


def _sanitize_conventions(conventions, /):
    """
    Internal: validate and normalize the per-grammar conventions in place.

    Raises
    - TypeError: on wrong types.
    - ValueError: on an empty or multi-character prefix, empty delimiters,
      delimiters containing the prefix, or a flags pair that is not two strings.
    """
    if not isinstance(prefix := conventions["prefix"], str):
        raise TypeError("grammar 'prefix' must be a string")
    elif len(prefix) != 1 or prefix.isspace():
        raise ValueError("grammar 'prefix' must be a single non-blank character")

    if not isinstance(delimiters := conventions["delimiters"], str):
        raise TypeError("grammar 'delimiters' must be a string")
    elif not delimiters:
        raise ValueError("grammar 'delimiters' cannot be empty")
    elif prefix in delimiters:
        raise ValueError("grammar 'delimiters' cannot contain the prefix")

    if not isinstance(flags := conventions["flags"], Sequence) or isinstance(flags, str):
        raise TypeError("grammar 'flags' must be a pair of strings")
    elif len(flags) != 2 or not all(isinstance(flag, str) for flag in flags):
        raise ValueError("grammar 'flags' must be a pair of strings")
    conventions["flags"] = tuple(flags)

    conventions["strict"] = bool(conventions["strict"])


class Grammar:
    """
    Ordered registry of argument models with insertion-time validation.

    The registry is write-once: arguments are only ever appended, and it is
    read-only while scanning, so one grammar can serve any number of scans.
    """

    def __init__(
            self,
            *,
            prefix=Unset,
            delimiters=Unset,
            flags=Unset,
            strict=Unset
    ):
        conventions = {
            "prefix": coalesce(prefix, DEFAULTS["prefix"]),
            "delimiters": coalesce(delimiters, DEFAULTS["delimiters"]),
            "flags": coalesce(flags, DEFAULTS["flags"]),
            "strict": coalesce(strict, DEFAULTS["strict"]),
        }
        _sanitize_conventions(conventions)

        for name, object in conventions.items():
            setattr(self, "_" + name, object)
        self._arguments = []

    prefix = mirror("prefix")
    delimiters = mirror("delimiters")
    flags = mirror("flags")
    strict = mirror("strict")
    arguments = mirror("arguments")

    def add(self, argument, /):
        """
        Validate and append an argument model; return it.

        rules
        - positional: its name must be new; a required positional cannot follow an
          optional one.
        - option: none of its names may be already taken by another option; options
          cannot follow positionals.
        - anything: nothing can follow a repeated positional (checked first).

        raises
        - DuplicateArgumentError / InvalidOrderingError on a rule violation.
        - TypeError if the object is not an argument model.
        """
        if (
            isinstance(argument, Positional | Option | Separator) and
            any(positional.repeated for positional in self.positionals())
        ):
            raise InvalidOrderingError(
                "no argument can follow a repeated positional argument",
                argument=argument
            )

        match argument:
            case Positional(name=name, optional=optional):
                if any(positional.name == name for positional in self.positionals()):
                    raise DuplicateArgumentError(
                        "positional argument %r already exists" % name,
                        argument=argument
                    )
                if not optional and any(positional.optional for positional in self.positionals()):
                    raise InvalidOrderingError(
                        "required positional argument %r cannot follow optional positional arguments" % name,
                        argument=argument
                    )
            case Option(names=names):
                for option in self.options():
                    if duplicates := set(option.names) & set(names):
                        raise DuplicateArgumentError(
                            "option name %r already exists" % sorted(duplicates)[0],
                            argument=argument
                        )
                if any(True for _ in self.positionals()):
                    raise InvalidOrderingError(
                        "option %r cannot follow positional arguments" % names[0],
                        argument=argument
                    )
            case Separator():
                pass
            case _:
                raise TypeError("add() argument must be a positional, an option, or a separator")

        self._arguments.append(argument)
        return argument

    def options(self):
        """
        Yield the declared options (flags and value options) in declaration order.
        """
        for argument in self._arguments:
            if isinstance(argument, Option):
                yield argument

    def positionals(self):
        """
        Yield the declared positionals in declaration order.
        """
        for argument in self._arguments:
            if isinstance(argument, Positional):
                yield argument

    def positional(self, name, /):
        """
        Start declaring a positional; finish with .key(...) or .repeated(...).
        """
        return PositionalBuilder(self, name)

    def option(self, name, /):
        """
        Start declaring an option; finish with .key(...).
        """
        return OptionBuilder(self, name)

    def separator(self, text, /, number=1, *, multiline=False):
        """
        Declare a separator made of `text` repeated `number` times, optionally
        wrapped in blank lines.
        """
        builder = SeparatorBuilder(self, text)
        return builder.block(number) if multiline else builder.add(number)

    def scan(self, tokens, /):
        """
        Scan tokens against this grammar (see argrammar.scanner.scan).
        """
        return scan(self, tokens)

    def __iter__(self):
        return iter(tuple(self._arguments))

    def __repr__(self):
        return f"{type(self).__name__}(prefix={self._prefix!r}, delimiters={self._delimiters!r}, flags={self._flags!r}, strict={self._strict!r}, arguments={len(self._arguments)})"


__all__ = (
    "DEFAULTS",
    "Grammar",
)

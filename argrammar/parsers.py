"""
Argrammar parser front-end: a grammar that materializes and reports.

What this module provides
- Parser: a Grammar bound to a materialization factory (ValueMap -> T), a program
  name, and presentation options.
  • parse(tokens) -> Result(value, faults): scan, then call the factory exactly once
    when there are no faults.
  • run(tokens) -> value: like parse(), but faults are surfaced as a ParseExit
    (raised, or printed with the usage and exit status 1 in shell mode).
  • usage / show_usage(): the usage text (see argrammar.usage).

Tokens
- Unset: sys.argv[1:].
- str: shell-like string, split with shlex.split.
- Iterable[str]: used as-is (each item must be a string).

Quick start
    from argrammar import Parser, ConfigMap, setting

    class Configuration(ConfigMap):
        verbose = setting("verbose", False)
        outfile = setting("outfile", "-")
        infile = setting("infile", "")

    parser = Parser(Configuration, prog="simple", shell=True)
    parser.option("-v").name("--verbose").description("active verbose output").key("verbose")
    parser.option("-o").value_name("OUT").default("-").description("output filename").key("outfile")
    parser.separator("-", 50)
    parser.positional("infile").required().description("input filename").key("infile")

    config = parser.run()
"""
import os.path
import shlex
import sys
from collections.abc import Iterable
from typing import NamedTuple

from rich.console import Console

from .faults import ConversionError, ParseExit, trigger
from .grammar import Grammar
from .usage import render
from .utils import *

console = Console(stderr=True)


class Result(NamedTuple):
    """
    Outcome of Parser.parse().

    - value: the factory's product (None when there are faults).
    - faults: tuple of ParseFault, empty on success.
    """
    value: object
    faults: tuple

    @property
    def ok(self):
        return not self.faults


def _tokenize(tokens, /):
    """
    Normalize a prompt (Unset, str, or iterable of str) into a tuple of tokens.
    """
    if tokens is Unset:
        return tuple(sys.argv[1:])
    if isinstance(tokens, str):
        return tuple(shlex.split(tokens))
    if isinstance(tokens, Iterable):
        tokens = tuple(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


class Parser(Grammar):
    """
    Grammar + materialization + presentation.

    Parameters
    - factory: Unset | Callable[[ValueMap], T]
      Builds the result from the ValueMap; without one the ValueMap itself is returned.
    - prog: Unset | str
      Program name in the usage and fault headers; defaults to basename(sys.argv[0]).
    - shell: bool
      run() prints the usage and faults to stderr and exits instead of raising.
    - colorful / fancy: bool
      Rich styling and panel chrome for rendered output.
    - prefix, delimiters, flags, strict: grammar conventions (see argrammar.grammar).
    """

    def __init__(
            self,
            factory=Unset,
            /,
            *,
            prog=Unset,
            shell=False,
            colorful=False,
            fancy=False,
            **conventions
    ):
        if factory is not Unset and not callable(factory):
            raise TypeError("parser 'factory' must be callable")
        if not isinstance(prog, str | Unset):
            raise TypeError("parser 'prog' must be a string")
        elif isinstance(prog, str) and not (prog := prog.strip()):
            raise ValueError("parser 'prog' cannot be empty")

        super().__init__(**conventions)
        self._factory = factory
        self._prog = coalesce(prog, os.path.basename(sys.argv[0]) or "prog")
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

    prog = mirror("prog")
    shell = mirror("shell")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    @property
    def usage(self):
        """
        The plain-text usage.
        """
        return render(self, self._prog).plain

    def show_usage(self):
        console.print(render(self, self._prog, colorful=self._colorful))

    def parse(self, tokens=Unset, /):
        """
        Scan the tokens and materialize the result.

        returns
        - Result(value, ()) when the tokens match the grammar and the factory succeeds.
        - Result(None, faults) with every scan fault, or with the ConversionError
          raised by the factory.
        """
        values, faults = self.scan(_tokenize(tokens))
        if faults:
            return Result(None, faults)
        if self._factory is Unset:
            return Result(values, ())
        try:
            return Result(self._factory(values), ())
        except ConversionError as error:
            return Result(None, (error,))

    def run(self, tokens=Unset, /):
        """
        Parse the tokens and return the value, or surface all faults at once.
        """
        value, faults = self.parse(tokens)
        if not faults:
            return value
        trigger(
            ParseExit(faults),
            prog=self._prog,
            shell=self._shell,
            colorful=self._colorful,
            fancy=self._fancy,
            usage=render(self, self._prog, colorful=self._colorful),
        )


__all__ = (
    "Parser",
    "Result",
)

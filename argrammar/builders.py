"""
Argrammar builders: method-chaining declarations over Grammar.add().

Forms
- positional:
    grammar.positional("infile").required().description("input filename").key("infile")
    grammar.positional("files").optional().repeated("files")

- option:
    grammar.option("-o").name("--output").value_name("OUT").default("-") \\
        .description("output filename").key("outfile")
    grammar.option("-v").name("--verbose").key("verbose")      # flag (no value name)

- separator:
    grammar.separator("-", 50)
    grammar.separator("=", 50, multiline=True)

Every builder is single-use: its terminal call (key/repeated/add/block) hands the
model to Grammar.add(), which validates it, and the builder cannot be finished twice.
"""
from .arguments import Positional, Option, Separator
from .utils import *


class _Builder:
    """
    Internal base: owns the target grammar and the single-use guard.
    """

    def __init__(self, grammar, /):
        self._grammar = grammar
        self._done = False

    def _add(self, argument, /):
        if self._done:
            raise TypeError(f"{type(self).__name__} can be finished only once")
        argument = self._grammar.add(argument)
        self._done = True
        return argument


class PositionalBuilder(_Builder):
    """
    Builder for Positional models (required by default).
    """

    def __init__(self, grammar, name, /):
        super().__init__(grammar)
        self._name = name
        self._descr = Unset
        self._optional = False

    def required(self):
        self._optional = False
        return self

    def optional(self):
        self._optional = True
        return self

    def description(self, descr, /):
        self._descr = descr
        return self

    def key(self, key, /, repeated=False):
        """
        Finish the declaration; return the added Positional.
        """
        return self._add(Positional(
            self._name,
            self._descr,
            optional=self._optional,
            repeated=repeated,
            key=key
        ))

    def repeated(self, key, /):
        """
        Finish the declaration as a repeated positional; return it.
        """
        return self.key(key, repeated=True)


class OptionBuilder(_Builder):
    """
    Builder for Option models; a flag unless value_name() is called.
    """

    def __init__(self, grammar, name, /):
        super().__init__(grammar)
        self._names = [name]
        self._metavar = Unset
        self._default = Unset
        self._descr = Unset

    def name(self, name, /):
        """
        Add another alias.
        """
        self._names.append(name)
        return self

    def value_name(self, metavar, /):
        self._metavar = metavar
        return self

    def default(self, default, /):
        """
        Value recorded when the option is not given (any object, stored as a string).
        """
        self._default = default
        return self

    def description(self, descr, /):
        self._descr = descr
        return self

    def key(self, key, /):
        """
        Finish the declaration; return the added Option.
        """
        return self._add(Option(
            *self._names,
            metavar=self._metavar,
            descr=self._descr,
            default=self._default,
            key=key
        ))


class SeparatorBuilder(_Builder):
    """
    Builder for Separator models.
    """

    def __init__(self, grammar, text, /):
        super().__init__(grammar)
        if not isinstance(text, str):
            raise TypeError("separator text must be a string")
        self._text = text

    def add(self, number=1, /):
        """
        Add the text repeated `number` times; return the Separator.
        """
        return self._add(Separator(self._text * _count(number)))

    def block(self, number=1, /):
        """
        Like add(), wrapped in line breaks.
        """
        return self._add(Separator("\n" + self._text * _count(number) + "\n"))


def _count(number, /):
    if not isinstance(number, int) or isinstance(number, bool):
        raise TypeError("separator number must be an integer")
    if number < 1:
        raise ValueError("separator number must be a positive integer")
    return number


__all__ = (
    "PositionalBuilder",
    "OptionBuilder",
    "SeparatorBuilder",
)

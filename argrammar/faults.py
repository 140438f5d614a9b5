"""
Argrammar faults (configuration errors, parse faults) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep copy consistent and searches predictable.
- GrammarError: configuration errors raised while a grammar is declared
  (DuplicateArgumentError, InvalidOrderingError). They signal a programming mistake
  and are never caught by the package.
- ParseFault: problems found in the user's tokens (UnknownArgumentError,
  MissingOptionError, MissingPositionalError) and in materialization
  (ConversionError). The scanner collects them; it never raises them.
- ParseExit: an exception group bundling all faults of one run, rendered once.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).

Rendering
- Faults implement __rich__; plain header/message/hint, or a Panel when fancy.
- Palettes can be overridden from __main__.__styles__; colors are applied only
  when the colorful option is on.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - grammar (101xx): raised while declaring arguments
      • DUPLICATE_ARGUMENT, INVALID_ORDERING
    - tokens (111xx): collected while scanning
      • UNKNOWN_ARGUMENT, MISSING_OPTION, MISSING_POSITIONAL
    - materialization (112xx)
      • CONVERSION
    """
    # --- grammar errors (101xx) ---
    DUPLICATE_ARGUMENT = 10101
    INVALID_ORDERING   = 10102

    # --- token errors (111xx) ---
    UNKNOWN_ARGUMENT   = 11101
    MISSING_OPTION     = 11102
    MISSING_POSITIONAL = 11103

    # --- materialization errors (112xx) ---
    CONVERSION         = 11201


class GrammarError(Exception):
    """
    Base class for invalid grammar declarations.

    Raised synchronously by Grammar.add(); the grammar is left unchanged.
    """
    code = Unset

    def __init__(self, message, /, *, argument=Unset):
        super().__init__(message)
        self.message = message
        self.argument = coalesce(argument)


class DuplicateArgumentError(GrammarError):
    code = FaultCode.DUPLICATE_ARGUMENT


class InvalidOrderingError(GrammarError):
    code = FaultCode.INVALID_ORDERING


_styles = {
    # header parts
    "prog-name": "bold #E6E6F0",  # near-white program name
    "code": "bold #00E5FF",  # neon cyan fault code
    "error-title": "bold #FF4DA6",  # friendly pinky title

    # body
    "error-message": "#C8C8D0",  # soft light gray message
    "hint-arrow": "#9CE19C dim",  # gentle green arrow
    "hint": "italic #9CE19C",  # gentle green hint text
}


def _palette(colorful):
    """
    resolve the styler/text helpers for one render (user overrides from __main__.__styles__).
    """
    styles = defaultdict(str, _styles | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), style if colorful else "")

    return styler, text


class ParseFault(Exception):
    """
    A problem found while parsing tokens or materializing values.

    contract
    - subject: the offending token, option name, or parameter name.
    - str(fault) is the human-readable message built from __template__.
    - two faults are equal when they share their type and subject.
    - options carry rendering context (prog, colorful, fancy, ...) and are replaced
      through copy.replace(fault, **options).
    """
    __template__ = "%s"
    code = Unset
    title = Unset
    hint = Unset

    def __init__(self, subject, /, **options):
        if not isinstance(subject, str):
            raise TypeError(f"{type(self).__name__}() subject must be a string")
        super().__init__(subject)
        self.subject = subject
        self.options = MappingProxyType(options)

    @property
    def message(self):
        return self.__template__ % self.subject

    def __str__(self):
        return self.message

    def __repr__(self):
        return f"{type(self).__name__}({self.subject!r})"

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.subject == other.subject

    def __hash__(self):
        return hash((type(self), self.subject))

    def __rich__(self):
        styler, text = _palette(self.options.get("colorful", False))

        header = Text.assemble(
            "[ ",
            text(self.options.get("prog", "error"), styler("prog-name")),
            " — ",
            text(str(self.code.value), styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint", self.hint), styler("hint")))

        if self.options.get("fancy", False):
            try:
                width = int((console.width - 4) * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(message, hint), title=header, title_align="left", width=width)

        return Group(header, message, hint)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.subject, **{**self.options, **overrides})


class UnknownArgumentError(ParseFault):
    __template__ = "unknown argument: %s"
    code = FaultCode.UNKNOWN_ARGUMENT
    title = "unknown argument"
    hint = "remove it or check the usage for accepted options and parameters"


class MissingOptionError(ParseFault):
    __template__ = "missing option: %s"
    code = FaultCode.MISSING_OPTION
    title = "missing option"
    hint = "pass the option with a value (for example: -o <value> or -o=<value>)"


class MissingPositionalError(ParseFault):
    __template__ = "missing parameter: %s"
    code = FaultCode.MISSING_POSITIONAL
    title = "missing parameter"
    hint = "add a value for it at its position; check the usage for the expected order"


class ConversionError(ParseFault):
    """
    A stored value that cannot be converted to its declared type.

    subject is the ValueMap key; value and type describe the failed conversion.
    """
    code = FaultCode.CONVERSION
    title = "invalid value"
    hint = "pass a value of the expected type"

    def __init__(self, subject, /, value=Unset, type=Unset, **options):
        super().__init__(subject, **options)
        self.value = value
        self.type = type

    @property
    def message(self):
        name = getattr(self.type, "__name__", None) or repr(self.type)
        return "cannot convert %r to %s for %r" % (self.value, name, self.subject)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return (self.subject, self.value, self.type) == (other.subject, other.value, other.type)

    def __hash__(self):
        return hash((type(self), self.subject, self.value))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.subject, self.value, self.type, **{**self.options, **overrides})


class ParseExit(ExceptionGroup):
    """
    All faults of one parse, surfaced together.

    options
    - prog, colorful, fancy: rendering context (propagated to the faults).
    - shell: print and exit with status 1 instead of raising.
    - usage: optional renderable printed before the faults in shell mode.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad usage", tuple(exceptions))

    def __init__(self, exceptions, **options):
        super().__init__("bad usage", tuple(exceptions))
        self.options = MappingProxyType(options)

    def derive(self, exceptions):
        return type(self)(exceptions, **self.options)

    def __rich__(self):
        styler, text = _palette(self.options.get("colorful", False))

        header = Text.assemble(
            "[ ",
            text(self.options.get("prog", "error"), styler("prog-name")),
            " — ",
            text(self.message.title(), styler("error-title")),
            " ]"
        )

        context = {name: self.options[name] for name in ("prog", "colorful", "fancy") if name in self.options}
        renders = [copy.replace(fault, ratio=2/3, **context) for fault in self.exceptions]

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        if usage := self.options.get("usage"):
            console.print(usage)
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseFault/ParseExit).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via the rich console; otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "GrammarError",
    "DuplicateArgumentError",
    "InvalidOrderingError",
    "ParseFault",
    "UnknownArgumentError",
    "MissingOptionError",
    "MissingPositionalError",
    "ConversionError",
    "ParseExit",
    "trigger",
)

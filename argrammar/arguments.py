r"""
Argrammar argument models.

Overview
- Models
  • Positional: a value identified by its position among the bare tokens
    (required or optional, single or repeated).
  • Option: a named argument with one or more aliases (e.g., -o/--output). With a
    metavar it consumes a value token; without one it is a presence-only flag.
  • Separator: cosmetic text shown in the usage, never matched while parsing.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields declared in __introspectable__ as read-only properties.

Metadata (sanitized on construction)
- Shared
  • descr: Unset | str | Text (short help), non-empty when provided, None otherwise.
  • key: Unset | str, the ValueMap key receiving parsed values; defaults to the
    positional name or to the primary option name.
- Positional
  • name: str, non-empty, used in usage and missing-parameter messages.
  • optional / repeated: bool.
- Option
  • names: one or more distinct, non-empty strings (order preserved, the first is
    the primary name used in messages).
  • metavar: Unset | str, label of the value; its presence makes a value option.
  • default: any object, stored as its string form (booleans as "true"/"false").

Quick example:
    >>> from argrammar.arguments import Positional, Option, Separator
    >>> Option("-v", "--verbose", descr="active verbose output", key="verbose")
    >>> Option("-o", metavar="OUT", default="-", key="outfile")
    >>> Separator("-" * 50)
    >>> Positional("infile", descr="input filename")
"""
import functools
import operator
import re

from rich.text import Text

from .utils import *


class ArgumentType(type):
    """
    Metaclass giving argument models read-only fields and a stable representation.

    Responsibilities
    - Expose every name listed in __introspectable__ as a property mirroring "_{name}".
    - Provide __repr__/__rich_repr__ built from the same names.
    - Derive __typename__ from the class name, used in validation messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(names=('-v', '--verbose'), metavar=None, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_string(cls, metadata, field, /, *, optional=True):
    """
    Internal: validate a string field and normalize it in place.

    - Unset is accepted when optional (becomes None).
    - Strings are trimmed and must be non-empty.
    """
    if not isinstance(value := metadata[field], str | Unset) or (not optional and value is Unset):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    elif isinstance(value, str) and not (value := value.strip()):
        raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
    metadata[field] = coalesce(value)


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate shared argument metadata ('descr' and 'key').
    The default key must already be resolved; an Unset key would become None.

    Raises
    - TypeError: if 'descr' or 'key' is not a string or Unset.
    - ValueError: if either is a string but empty after trimming.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    _sanitize_string(cls, metadata, "key")


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the aliases of an Option.

    - names: required; each name must be a non-empty string without whitespace.
      Duplicates are rejected. Declaration order is kept (the first alias is the
      primary name).
    - key defaults to the primary name.
    """
    names = []
    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not name.strip():
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif re.search(r"\s", name):
            raise ValueError(f"{cls.__typename__} names cannot contain whitespaces")
        elif name in names:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        names.append(name)

    metadata["names"] = tuple(names)
    metadata["key"] = coalesce(metadata["key"], names[0])


def _stringify(default, /):
    """
    Internal: the raw string form stored for an option default.
    """
    if isinstance(default, bool):
        return "true" if default else "false"
    return str(default)


class Positional(metaclass=ArgumentType):
    """
    Positional argument model.

    Binds one bare token (a token not starting with the option prefix) per
    occurrence, in declaration order. A repeated positional keeps binding every
    following bare token, accumulating an ordered list of values.
    """

    __introspectable__ = (
        "name",
        "descr",
        "optional",
        "repeated",
        "key",
    )

    def __new__(cls, name, /, descr=Unset, *, optional=False, repeated=False, key=Unset):
        """
        Construct a Positional with the provided metadata.

        Parameters
        - name: str
          Display name used in usage and in missing-parameter messages.
        - descr: Unset | str | Text
          Short description for the usage. If Unset, becomes None.
        - optional: bool
          The positional may be left out.
        - repeated: bool
          The positional binds every remaining bare token.
        - key: Unset | str
          ValueMap key; defaults to name.
        """
        metadata = {
            "name": name,
            "descr": descr,
            "optional": bool(optional),
            "repeated": bool(repeated),
            "key": key,
        }
        _sanitize_string(cls, metadata, "name", optional=False)
        metadata["key"] = coalesce(metadata["key"], metadata["name"])
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __setattr__(self, name, value, /):
        if not name.startswith("_"):
            raise AttributeError(f"{type(self).__typename__} is read-only")
        object.__setattr__(self, name, value)


class Option(metaclass=ArgumentType):
    """
    Named argument model.

    With a metavar the option consumes a value, either from the next token
    ("-o out.txt") or inline after a delimiter ("-o:out.txt", "-o=out.txt").
    Without a metavar it is a flag: its presence alone carries meaning.
    """

    __introspectable__ = (
        "names",
        "metavar",
        "descr",
        "default",
        "key",
    )

    def __new__(cls, *names, metavar=Unset, descr=Unset, default=Unset, key=Unset):
        """
        Construct an Option with the provided metadata.

        Parameters
        - names: one or more str
          Aliases, e.g. "-o", "--output". The first one is the primary name.
        - metavar: Unset | str
          Name of the value; makes this a value option. Flags leave it Unset.
        - descr: Unset | str | Text
          Short description for the usage. If Unset, becomes None.
        - default: Any
          Value recorded when the option is not given; stored as a string.
          Value options without a default are required.
        - key: Unset | str
          ValueMap key; defaults to the primary name.
        """
        metadata = {
            "names": names,
            "metavar": metavar,
            "descr": descr,
            "default": default,
            "key": key,
        }
        _sanitize_named_metadata(cls, metadata)
        _sanitize_metadata(cls, metadata)
        _sanitize_string(cls, metadata, "metavar")
        metadata["default"] = None if default is Unset else _stringify(default)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __setattr__(self, name, value, /):
        if not name.startswith("_"):
            raise AttributeError(f"{type(self).__typename__} is read-only")
        object.__setattr__(self, name, value)

    @property
    def name(self):
        """
        The primary name, used in missing-option messages.
        """
        return self._names[0]

    @property
    def flag(self):
        """
        True for presence-only options (no metavar).
        """
        return self._metavar is None


class Separator(metaclass=ArgumentType):
    """
    Cosmetic usage line; carries no semantics and is never matched.
    """

    __introspectable__ = (
        "text",
    )

    def __new__(cls, text, /):
        if not isinstance(text, str | Text):
            raise TypeError(f"{cls.__typename__} 'text' must be a string")
        self = super().__new__(cls)
        self._text = text
        return self

    def __setattr__(self, name, value, /):
        if not name.startswith("_"):
            raise AttributeError(f"{type(self).__typename__} is read-only")
        object.__setattr__(self, name, value)


__all__ = (
    "Positional",
    "Option",
    "Separator",
)

del ArgumentType

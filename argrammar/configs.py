"""
Argrammar configs: turn a ValueMap into a typed configuration object.

What this module provides
- ConfigMap: wraps a ValueMap and converts raw strings on request
  (get() for the last occurrence, getall() for every occurrence).
- setting(): declarative, typed fields for ConfigMap subclasses, resolved eagerly
  when the ConfigMap is built so conversion faults surface at materialization time.
- boolean(): the converter used for flags and bool settings.

Quick example:
    class Configuration(ConfigMap):
        verbose = setting("verbose", False)
        outfile = setting("outfile", "-")
        infile = setting("infile", type=str)
        files = setting("files", type=str, many=True)

    parser = Parser(Configuration)

Conversion
- type may be any callable str -> T (int, float, str, pathlib.Path, ...); bool is
  mapped to boolean(). ValueError/TypeError raised by the converter become a
  ConversionError naming the key, the raw value and the type.
"""
import builtins
from types import MappingProxyType

from .faults import ConversionError
from .utils import *

_TRUTHS = frozenset({"true", "yes", "on", "1"})
_FALSITIES = frozenset({"false", "no", "off", "0"})


def boolean(value, /):
    """
    Convert a raw flag/option string to bool (case-insensitive true/false, yes/no, on/off, 1/0).
    """
    if not isinstance(value, str):
        raise TypeError("boolean() argument must be a string")
    if (lowered := value.strip().lower()) in _TRUTHS:
        return True
    if lowered in _FALSITIES:
        return False
    raise ValueError("invalid boolean literal: %r" % value)


def _converter(type, /):
    if type is bool:
        return boolean
    if not callable(type):
        raise TypeError("conversion 'type' must be callable")
    return type


def _convert(key, value, type, /):
    try:
        return _converter(type)(value)
    except (ValueError, TypeError):
        raise ConversionError(key, value, type) from None


class ConfigMap:
    """
    Typed view over a ValueMap.

    - values: the raw ValueMap (read-only).
    - get(key, type=str, default=Unset): last value of key, converted.
    - getall(key, type=str): every value of key, converted, as a tuple.
    Settings declared with setting() are resolved in __init__.
    """

    def __init__(self, values, /):
        self._values = MappingProxyType({key: tuple(value) for key, value in values.items()})
        self._settings = {}
        for cls in reversed(type(self).__mro__):
            for name, object in vars(cls).items():
                if isinstance(object, Setting):
                    self._settings[name] = object.resolve(self)

    values = mirror("values")

    def get(self, key, /, type=str, default=Unset):
        """
        Convert the last recorded value of `key`.

        Missing keys return `default`, or raise KeyError when no default is given.
        Keys holding no value (an optional repeated positional left out) return
        `default`, or None.
        """
        if key not in self._values:
            if default is Unset:
                raise KeyError(key)
            return default
        if not (values := self._values[key]):
            return coalesce(default)
        return _convert(key, values[-1], type)

    def getall(self, key, /, type=str):
        """
        Convert every recorded value of `key` (empty tuple when missing).
        """
        return tuple(_convert(key, value, type) for value in self._values.get(key, ()))

    def __contains__(self, key):
        return key in self._values

    def __repr__(self):
        return f"{type(self).__name__}({", ".join(f"{name}={value!r}" for name, value in self._settings.items())})"

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._values == other._values

    def __hash__(self):
        return hash((type(self), tuple(self._values.items())))


class Setting:
    """
    Descriptor for a typed ConfigMap field (see setting()).
    """

    def __init__(self, key, default, type, many):
        self.key = key
        self.default = default
        self.type = type
        self.many = many
        self.name = key

    def __set_name__(self, owner, name):
        self.name = name

    def resolve(self, config, /):
        if self.many:
            return config.getall(self.key, self.type)
        return config.get(self.key, self.type, self.default)

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance._settings[self.name]

    def __set__(self, instance, value):
        raise AttributeError(f"setting {self.name!r} is read-only")


def setting(key, /, default=Unset, type=Unset, *, many=False):
    """
    Declare a typed field of a ConfigMap subclass.

    parameters
    - key: the ValueMap key to read.
    - default: returned when the key holds no value; omit it to make the key required
      (a KeyError is raised at materialization time when it is missing).
    - type: converter; inferred from the default when omitted (str when both are omitted).
    - many: read every occurrence (tuple) instead of the last one.
    """
    if not isinstance(key, str):
        raise TypeError("setting() key must be a string")
    elif not key:
        raise ValueError("setting() key cannot be empty")
    if type is Unset:
        type = str if default is Unset or default is None else builtins.type(default)
    _converter(type)
    return Setting(key, default, type, bool(many))


__all__ = (
    "ConfigMap",
    "Setting",
    "setting",
    "boolean",
)

r"""
Argspan option registry.

Overview
- OptionKind: what an option binds (presence flag, required value, optional value).
- OptionDefinition: one read-only, registered optional argument.
- OptionRegistry: the caller-declared schema, looked up by name and by alias.

Validation highlights
- Names must match r"[a-z0-9]+(-[a-z0-9]+)*" and be at least two characters long.
- Aliases are exactly one character from [A-Za-z0-9].
- Names and aliases are each unique across a registry.
- A failing registration raises and leaves the registry exactly as it was.

Quick example:
    >>> registry = OptionRegistry()
    >>> registry.required_value("user")
    >>> registry.flag("verbose", "v", repeatable=True)
"""
import re
from enum import Enum
from typing import final

from .faults import DuplicateAliasError, DuplicateNameError, InvalidAliasError, InvalidNameError
from .utils import Unset, coalesce, mirror

_NAME = re.compile(r"[a-z0-9]+(-[a-z0-9]+)*")
_ALIAS = re.compile(r"[A-Za-z0-9]")


class OptionKind(Enum):
    """what an optional argument binds when it is matched."""
    FLAG = "flag"
    REQUIRED_VALUE = "required-value"
    OPTIONAL_VALUE = "optional-value"


@final
class OptionDefinition:
    """
    read-only description of one registered optional argument.

    fields
    - name: long name, used as '--name'.
    - kind: OptionKind.
    - repeatable: whether several occurrences may appear in one parse.
    - alias: single character used as '-x', or None.
    """
    __slots__ = ("name", "kind", "repeatable", "alias")

    def __init__(self, name, kind, repeatable=False, alias=None):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "repeatable", repeatable)
        object.__setattr__(self, "alias", alias)

    def __setattr__(self, name, value, /):
        raise AttributeError("option definitions are read-only")

    def __delattr__(self, name, /):
        raise AttributeError("option definitions are read-only")

    def __eq__(self, other):
        if not isinstance(other, OptionDefinition):
            return NotImplemented
        return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())

    def __hash__(self):
        return hash(tuple(self.__rich_repr__()))

    def __repr__(self):
        return "option-definition(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "name", self.name
        yield "kind", self.kind
        yield "repeatable", self.repeatable
        yield "alias", self.alias


class OptionRegistry:
    """
    caller-declared schema of optional arguments.

    the registry is filled once before parsing and only read afterwards; the
    parser never mutates it, so one registry can back any number of parses.
    """

    options = mirror("options")
    aliases = mirror("aliases")

    def __init__(self):
        self._options = {}
        self._aliases = {}

    def add_option(self, name, kind, repeatable=False, alias=Unset):
        """
        validate and store a new optional argument.

        raises
        - TypeError on wrong argument types (programmer misuse).
        - InvalidNameError / InvalidAliasError on grammar violations.
        - DuplicateNameError / DuplicateAliasError when already registered.

        returns
        - the stored OptionDefinition.
        """
        alias = coalesce(alias)

        if not isinstance(name, str):
            raise TypeError("add_option() name must be a string")
        if not isinstance(kind, OptionKind):
            raise TypeError("add_option() kind must be an OptionKind")
        if not isinstance(repeatable, bool):
            raise TypeError("add_option() repeatable must be a boolean")
        if alias is not None and not isinstance(alias, str):
            raise TypeError("add_option() alias must be a string")

        if len(name) < 2 or not _NAME.fullmatch(name):
            raise InvalidNameError(
                "option name %r is not valid" % name,
                hint="use two or more lowercase letters or digits, optionally joined by single hyphens (e.g., my-option)",
                name=name,
            )
        if alias is not None and not _ALIAS.fullmatch(alias):
            raise InvalidAliasError(
                "alias %r of option %r is not valid" % (alias, name),
                hint="use exactly one ascii letter or digit (e.g., v)",
                name=name,
                alias=alias,
            )
        if name in self._options:
            raise DuplicateNameError(
                "option name %r is already registered" % name,
                hint="pick another name or drop the second registration",
                name=name,
            )
        if alias is not None and alias in self._aliases:
            raise DuplicateAliasError(
                "alias %r of option %r is already used by option %r" % (alias, name, self._aliases[alias]),
                hint="pick another alias or register %r without one" % name,
                name=name,
                alias=alias,
                owner=self._aliases[alias],
            )

        self._options[name] = definition = OptionDefinition(name, kind, repeatable, alias)
        if alias is not None:
            self._aliases[alias] = name
        return definition

    def flag(self, name, alias=Unset, /, *, repeatable=False):
        """register a boolean flag."""
        return self.add_option(name, OptionKind.FLAG, repeatable, alias)

    def required_value(self, name, alias=Unset, /, *, repeatable=False):
        """register an option that must bind a value."""
        return self.add_option(name, OptionKind.REQUIRED_VALUE, repeatable, alias)

    def optional_value(self, name, alias=Unset, /, *, repeatable=False):
        """register an option whose value is only bound when written explicitly."""
        return self.add_option(name, OptionKind.OPTIONAL_VALUE, repeatable, alias)

    def get(self, name, default=None, /):
        return self._options.get(name, default)

    def resolve(self, alias, default=None, /):
        """return the definition registered under a one-character alias."""
        try:
            return self._options[self._aliases[alias]]
        except KeyError:
            return default

    def __getitem__(self, name, /):
        return self._options[name]

    def __contains__(self, name, /):
        return name in self._options

    def __iter__(self):
        return iter(self._options.values())

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return "option-registry(%s)" % ", ".join(map(repr, self._options))

    def __rich_repr__(self):
        yield from self._options.values()


__all__ = (
    "OptionKind",
    "OptionDefinition",
    "OptionRegistry",
)

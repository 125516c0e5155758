"""
Parsed arguments: the sealed family of results produced by the parser.

Variants
- Positional(value): a token not bound to any option.
- Flag(name, value): a boolean flag occurrence.
- Value(name, value): a required-value option occurrence.
- OptionalValue(name, value): an optional-value option occurrence (value may be None).

Every variant is immutable, hashable, compares by value and supports structural
pattern matching, so callers can write exhaustive matches:

    match arg:
        case Positional(value): ...
        case Flag(name, value): ...
        case Value(name, value): ...
        case OptionalValue(name, value): ...

The family is closed: ParsedArg and its variants cannot be subclassed elsewhere.
"""
from typing import final


class ParsedArg:
    """base of the sealed parsed-argument family."""
    __slots__ = ()
    __match_args__ = ()

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        if cls.__module__ != __name__:
            raise TypeError("type 'ParsedArg' is sealed and not an acceptable base type")

    def __init__(self, *values):
        if len(values) != len(self.__match_args__):
            raise TypeError("%s() takes %d arguments but %d were given" % (
                type(self).__name__, len(self.__match_args__), len(values)
            ))
        for field, value in zip(self.__match_args__, values):
            object.__setattr__(self, field, value)

    def __setattr__(self, name, value, /):
        raise AttributeError("parsed arguments are read-only")

    def __delattr__(self, name, /):
        raise AttributeError("parsed arguments are read-only")

    def __iter__(self):
        for field in self.__match_args__:
            yield getattr(self, field)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return tuple(self) == tuple(other)

    def __hash__(self):
        return hash((type(self).__name__, *self))

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join("%s=%r" % pair for pair in self.__rich_repr__()))

    def __rich_repr__(self):
        for field in self.__match_args__:
            yield field, getattr(self, field)

    def __reduce__(self):
        return type(self), tuple(self)


@final
class Positional(ParsedArg):
    __slots__ = ("value",)
    __match_args__ = ("value",)

    def __init__(self, value):
        super().__init__(value)


@final
class Flag(ParsedArg):
    __slots__ = ("name", "value")
    __match_args__ = ("name", "value")

    def __init__(self, name, value=True):
        super().__init__(name, value)


@final
class Value(ParsedArg):
    __slots__ = ("name", "value")
    __match_args__ = ("name", "value")

    def __init__(self, name, value):
        super().__init__(name, value)


@final
class OptionalValue(ParsedArg):
    __slots__ = ("name", "value")
    __match_args__ = ("name", "value")

    def __init__(self, name, value=None):
        super().__init__(name, value)


__all__ = (
    "ParsedArg",
    "Positional",
    "Flag",
    "Value",
    "OptionalValue",
)

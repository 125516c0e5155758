"""
Read-only queries over a parsed argument sequence.

ArgSelector answers the usual questions a program asks after parsing (which
positionals, is this flag on, what value was given) without touching the
sequence. Later occurrences win over earlier ones.
"""
from .parsed import Flag, OptionalValue, ParsedArg, Positional, Value


class ArgSelector:
    """
    wraps a produced ParsedArg sequence (kept as a tuple).

    queries
    - get_positional(): positional values, in order.
    - get_flag(name, default): value of the last occurrence of the flag.
    - get_value(name): value bound by the last occurrence of the option.
    - get_values(name): every bound value of the option, in order.
    - count_flag(name): number of occurrences set to true (e.g. -vvv → 3).
    - has(name): whether the name occurs at all.
    """

    def __init__(self, args):
        args = tuple(args)
        if not all(isinstance(arg, ParsedArg) for arg in args):
            raise TypeError("ArgSelector() argument must be an iterable of parsed arguments")
        self._args = args

    @property
    def args(self):
        return self._args

    def get_positional(self):
        return [arg.value for arg in self._args if isinstance(arg, Positional)]

    def get_flag(self, name, default=False):
        for arg in reversed(self._args):
            match arg:
                case Flag(found, value) if found == name:
                    return value
        return default

    def get_value(self, name):
        for arg in reversed(self._args):
            match arg:
                case Value(found, value) if found == name:
                    return value
                case OptionalValue(found, value) if found == name and value is not None:
                    return value
        return None

    def get_values(self, name):
        values = []
        for arg in self._args:
            match arg:
                case Value(found, value) | OptionalValue(found, value) if found == name and value is not None:
                    values.append(value)
        return values

    def count_flag(self, name):
        return sum(1 for arg in self._args if isinstance(arg, Flag) and arg.name == name and arg.value)

    def has(self, name):
        return any(getattr(arg, "name", None) == name for arg in self._args)

    def __len__(self):
        return len(self._args)

    def __iter__(self):
        return iter(self._args)

    def __repr__(self):
        return "arg-selector(%s)" % ", ".join(map(repr, self._args))


__all__ = (
    "ArgSelector",
)

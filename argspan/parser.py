"""
Argspan parser engine.

Overview
- ArgParserMode: MIXED (options and positionals interleave) or OPTIONS_FIRST
  (the first positional ends option recognition, subcommand style).
- parse(registry, args, mode): pure function from (schema, tokens) to a list of
  ParsedArg, or a single raised ParseError.
- ArgParser: convenience owner of a registry + mode, with parse_args() reading
  the host process arguments.

Token classification (while options are still recognized)
- '--'              → literal mode; every later token is positional.
- '--name[=value]'  → long form, name looked up in the registry.
- '-abc[=value]'    → short cluster, aliases resolved one character at a time.
- anything else     → positional.

Value binding
- flags take no value, or an explicit 'true'/'false' after '='.
- required values come from '=value', the rest of a short cluster, or the next
  token (rejected when that token is itself option-shaped).
- optional values come from '=value' or the rest of a short cluster only.

All-or-nothing: the first fault aborts the parse and nothing is returned.
"""
import logging
import shlex
import sys
from collections import deque
from collections.abc import Iterable
from enum import Enum

from .faults import (
    AmbiguousValueError,
    DuplicateOptionError,
    InvalidFlagValueError,
    MissingValueError,
    ParseError,
    UnknownOptionError,
    render,
)
from .options import OptionKind, OptionRegistry
from .parsed import Flag, OptionalValue, Positional, Value
from .selector import ArgSelector
from .utils import Unset, coalesce, ordinal

LOGGER = logging.getLogger(__name__)

_LITERALS = {"true": True, "false": False}


class ArgParserMode(Enum):
    """how options and positionals may be ordered."""
    MIXED = "mixed"
    OPTIONS_FIRST = "options-first"


def _option_shaped(token):
    # long or short option form; the bare literal marker does not count
    return token.startswith("-") and len(token) > 1 and token != "--"


class _Scanner:
    """
    single-use state for one parse call.

    state
    - tokens: remaining raw tokens (deque, consumed from the left).
    - index: 1-based position of the token being handled (for messages).
    - seen: names already matched, to reject non-repeatable duplicates.
    - literal: set once '--' is seen.
    - options: cleared after the first positional in OPTIONS_FIRST mode.
    """

    def __init__(self, registry, tokens, mode):
        self._registry = registry
        self._mode = mode
        self._tokens = deque(tokens)
        self._index = 0
        self._results = []
        self._seen = set()
        self._literal = False
        self._options = True

    def run(self):
        while self._tokens:
            token = self._tokens.popleft()
            self._index += 1

            if self._literal or not self._options:
                self._results.append(Positional(token))
            elif token == "--":
                self._literal = True
            elif token.startswith("--"):
                self._parse_long(token)
            elif token.startswith("-") and len(token) > 1:
                self._parse_short(token)
            else:
                self._results.append(Positional(token))
                if self._mode is ArgParserMode.OPTIONS_FIRST:
                    self._options = False

        return self._results

    def _parse_long(self, token):
        name, separator, value = token[2:].partition("=")

        if (definition := self._registry.get(name)) is None:
            raise UnknownOptionError(
                "unknown option %r at %s position" % ("--" + name, ordinal(self._index)),
                hint="check the spelling, or pass it after '--' to use it as a positional",
                name=name,
                token=token,
                index=self._index,
            )

        self._bind(definition, "--" + name, value if separator else Unset)

    def _parse_short(self, token):
        position = 1
        while position < len(token):
            alias = token[position]

            if (definition := self._registry.resolve(alias)) is None:
                raise UnknownOptionError(
                    "unknown option %r at %s position" % ("-" + alias, ordinal(self._index)),
                    hint="check the spelling, or pass it after '--' to use it as a positional",
                    name=alias,
                    token=token,
                    index=self._index,
                )

            remainder = token[position + 1:]

            # '-x=value' binds explicitly and ends the cluster, whatever the kind
            if remainder.startswith("="):
                return self._bind(definition, "-" + alias, remainder[1:])

            if definition.kind is OptionKind.FLAG:
                self._bind(definition, "-" + alias, Unset)
                position += 1
                continue

            # value-bearing aliases swallow the rest of the token verbatim
            return self._bind(definition, "-" + alias, remainder if remainder else Unset)

    def _bind(self, definition, input, value):
        name = definition.name

        if name in self._seen and not definition.repeatable:
            raise DuplicateOptionError(
                "option %r at %s position was already given" % (input, ordinal(self._index)),
                hint="remove the repeated occurrence; %r accepts a single occurrence" % name,
                name=name,
                token=input,
                index=self._index,
            )
        self._seen.add(name)

        match definition.kind:
            case OptionKind.FLAG:
                if value is Unset:
                    self._results.append(Flag(name, True))
                elif value in _LITERALS:
                    self._results.append(Flag(name, _LITERALS[value]))
                else:
                    raise InvalidFlagValueError(
                        "flag %r at %s position only accepts 'true' or 'false', not %r" % (
                            input, ordinal(self._index), value
                        ),
                        hint="write %s=true, %s=false, or just %s" % (input, input, input),
                        name=name,
                        token=input,
                        value=value,
                        index=self._index,
                    )
            case OptionKind.REQUIRED_VALUE:
                self._results.append(Value(name, value if value is not Unset else self._take(definition, input)))
            case OptionKind.OPTIONAL_VALUE:
                self._results.append(OptionalValue(name, coalesce(value)))

    def _take(self, definition, input):
        try:
            token = self._tokens[0]
        except IndexError:
            raise MissingValueError(
                "option %r at %s position requires a value" % (input, ordinal(self._index)),
                hint="add a value after a space or '=' (for example: %s=<value>)" % input,
                name=definition.name,
                token=input,
                index=self._index,
            ) from None

        if _option_shaped(token):
            raise AmbiguousValueError(
                "option %r at %s position is followed by option-like %r" % (input, ordinal(self._index), token),
                hint="use %s=%s to pass it as the value" % (input, token),
                name=definition.name,
                token=input,
                value=token,
                index=self._index,
            )

        self._tokens.popleft()
        self._index += 1
        return token


def parse(registry, args, mode=ArgParserMode.MIXED):
    """
    parse a sequence of raw argument strings against a registry.

    parameters
    - registry: OptionRegistry, only read.
    - args: iterable of str (a plain string is rejected; split it first).
    - mode: ArgParserMode.

    returns
    - list[ParsedArg] in input order.

    raises
    - TypeError on wrong argument types.
    - ParseError subclasses on invalid input; nothing partial is returned.
    """
    if not isinstance(registry, OptionRegistry):
        raise TypeError("parse() registry must be an OptionRegistry")
    if not isinstance(mode, ArgParserMode):
        raise TypeError("parse() mode must be an ArgParserMode")
    if isinstance(args, str) or not isinstance(args, Iterable):
        raise TypeError("parse() args must be an iterable of strings")

    tokens = list(args)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("parse() args must be an iterable of strings")

    LOGGER.debug("parsing %d token(s) in %s mode", len(tokens), mode.value)
    try:
        results = _Scanner(registry, tokens, mode).run()
    except ParseError as fault:
        LOGGER.debug("parse failed: %s", render(fault))
        raise
    LOGGER.debug("parsed %d argument(s)", len(results))
    return results


class ArgParser:
    """
    convenience owner of an option registry and a parsing mode.

    the registry can be shared with other parsers; parsing never mutates it.
    """

    def __init__(self, mode=ArgParserMode.MIXED, registry=Unset):
        if not isinstance(mode, ArgParserMode):
            raise TypeError("ArgParser() mode must be an ArgParserMode")
        registry = OptionRegistry() if registry is Unset else registry
        if not isinstance(registry, OptionRegistry):
            raise TypeError("ArgParser() registry must be an OptionRegistry")
        self._mode = mode
        self._registry = registry

    @property
    def mode(self):
        return self._mode

    @property
    def registry(self):
        return self._registry

    def add_option(self, name, kind, repeatable=False, alias=Unset):
        return self._registry.add_option(name, kind, repeatable, alias)

    def flag(self, name, alias=Unset, /, *, repeatable=False):
        return self._registry.flag(name, alias, repeatable=repeatable)

    def required_value(self, name, alias=Unset, /, *, repeatable=False):
        return self._registry.required_value(name, alias, repeatable=repeatable)

    def optional_value(self, name, alias=Unset, /, *, repeatable=False):
        return self._registry.optional_value(name, alias, repeatable=repeatable)

    def parse(self, args):
        return parse(self._registry, args, self._mode)

    def parse_args(self, argv=Unset):
        """
        parse the host process arguments (or a stand-in).

        parameters
        - argv:
          • Unset: read tokens from sys.argv[1:] (program name skipped).
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used as-is.
        """
        if argv is Unset:
            tokens = sys.argv[1:]
        elif isinstance(argv, str):
            tokens = shlex.split(argv)
        else:
            tokens = argv
        return self.parse(tokens)

    def select(self, argv=Unset):
        """parse like parse_args() and wrap the result in an ArgSelector."""
        return ArgSelector(self.parse_args(argv))

    def __repr__(self):
        return "arg-parser(mode=%r, registry=%r)" % (self._mode, self._registry)


__all__ = (
    "ArgParserMode",
    "ArgParser",
    "parse",
)

"""
Argspan faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every error the library
  raises. Codes are grouped by phase so logs/searches stay predictable.
- ArgParserError: base type that carries message + options and knows how to
  render itself (plain one-liner via str()/render(), rich block via __rich__).
- ConfigurationError / ParseError: the two phases (registry build time vs parse time).
- render(): pure single-line formatting for any fault.
- report(): print a fault on stderr through rich.

UX goals
- Position-first messages: parse errors name the ordinal position of the
  offending token (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- The registry and the parser raise these faults; nothing is collected or deferred.
- Hosts may relabel codes via a __codes__ mapping, restyle via __styles__ and
  rename the program via __prog__, all read from __main__.
"""
import os
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers, closed set).

    grouping
    - configuration (2110x), raised while building an option registry
      • INVALID_NAME, INVALID_ALIAS, DUPLICATE_NAME, DUPLICATE_ALIAS
    - parsing (2120x), raised while parsing an argument sequence
      • UNKNOWN_OPTION, MISSING_VALUE, AMBIGUOUS_VALUE, INVALID_FLAG_VALUE,
        DUPLICATE_OPTION
    """
    # --- configuration errors (2110x) ---
    INVALID_NAME        = 21101
    INVALID_ALIAS       = 21102
    DUPLICATE_NAME      = 21103
    DUPLICATE_ALIAS     = 21104

    # --- parse errors (2120x) ---
    UNKNOWN_OPTION      = 21201
    MISSING_VALUE       = 21202
    AMBIGUOUS_VALUE     = 21203
    INVALID_FLAG_VALUE  = 21204
    DUPLICATE_OPTION    = 21205

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(sys.modules.get("__main__"), "__codes__", {}).get(self, self.value))


class ArgParserError(Exception):
    """
    base of every argspan fault.

    each concrete subclass pins its FaultCode and a short title; the raise site
    supplies the one-line message plus context options (hint, name, token, index...).
    options are exposed read-only.
    """
    code = Unset
    title = Unset

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("%s() message must be a string" % type(self).__name__)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({"code": type(self).code, "title": type(self).title} | options)
        # instance copies shadow the class defaults so __replace__ overrides are honoured
        self.code = self.options["code"]
        self.title = self.options["title"]

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        if cls.__module__ != __name__:
            raise TypeError("type %r is not an acceptable base type" % ArgParserError.__name__)

    def __str__(self):
        return self.message

    def __rich__(self):
        main = sys.modules.get("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = getattr(main, "__prog__", os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "argspan")

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(ArgParserError):
    """raised while building a registry; aborts only the offending registration."""


class ParseError(ArgParserError):
    """raised while parsing; aborts the whole parse (no partial output)."""


class InvalidNameError(ConfigurationError):
    code = FaultCode.INVALID_NAME
    title = "invalid option name"


class InvalidAliasError(ConfigurationError):
    code = FaultCode.INVALID_ALIAS
    title = "invalid option alias"


class DuplicateNameError(ConfigurationError):
    code = FaultCode.DUPLICATE_NAME
    title = "duplicate option name"


class DuplicateAliasError(ConfigurationError):
    code = FaultCode.DUPLICATE_ALIAS
    title = "duplicate option alias"


class UnknownOptionError(ParseError):
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"


class MissingValueError(ParseError):
    code = FaultCode.MISSING_VALUE
    title = "missing value"


class AmbiguousValueError(ParseError):
    code = FaultCode.AMBIGUOUS_VALUE
    title = "ambiguous value"


class InvalidFlagValueError(ParseError):
    code = FaultCode.INVALID_FLAG_VALUE
    title = "invalid flag value"


class DuplicateOptionError(ParseError):
    code = FaultCode.DUPLICATE_OPTION
    title = "duplicate option"


def render(fault, /):
    """
    format a fault as one stable, human-readable line.

    shape
    - "error <code>: <message>", where <code> goes through FaultCode.normalize()
      so host relabelling (__codes__) applies here too.
    """
    if not isinstance(fault, ArgParserError):
        raise TypeError("render() argument must be an argspan fault")
    return "error %s: %s" % (fault.code.normalize(), fault.message)


def report(fault, /, **options):
    """
    print a fault to stderr through rich.

    options (fancy, colorful, ...) are merged into the fault before rendering,
    the fault itself is left untouched.
    """
    if not isinstance(fault, ArgParserError):
        raise TypeError("report() argument must be an argspan fault")
    console.print(fault.__replace__(**options) if options else fault)


__all__ = (
    "FaultCode",
    "ArgParserError",
    "ConfigurationError",
    "ParseError",
    "InvalidNameError",
    "InvalidAliasError",
    "DuplicateNameError",
    "DuplicateAliasError",
    "UnknownOptionError",
    "MissingValueError",
    "AmbiguousValueError",
    "InvalidFlagValueError",
    "DuplicateOptionError",
    "render",
    "report",
)

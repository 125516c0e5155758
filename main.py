import sys

from rich.pretty import pprint

from argspan import *

__prog__ = "argspan-demo"

parser = ArgParser(ArgParserMode.OPTIONS_FIRST)
parser.required_value("user", "u")
parser.flag("interactive", "i")
parser.flag("verbose", "v", repeatable=True)
parser.optional_value("color", "c")


if __name__ == '__main__':
    try:
        selector = parser.select()
    except ParseError as fault:
        report(fault)
        sys.exit(1)
    pprint(list(selector))
    pprint({
        "user": selector.get_value("user"),
        "interactive": selector.get_flag("interactive", False),
        "verbosity": selector.count_flag("verbose"),
        "color": selector.get_value("color"),
        "positional": selector.get_positional(),
    })

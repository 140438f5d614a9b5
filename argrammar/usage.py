"""
Argrammar usage rendering.

Layout
    usage: prog [options] infile [outfile] [files ...]

    options:
      -v, --verbose      active verbose output
      -o OUT             output filename, default: stdout
      --------------------------------------------------
      infile             input filename

- "[options] " appears only when the grammar declares options.
- optional positionals are wrapped in brackets; repeated ones end with "...".
- the left column lists every alias (followed by the metavar for value options)
  joined by ", "; descriptions are aligned three columns past the widest entry.
- separators fill the left column alone.

Styling
- Palette keys: usage-label, program-name, options-label, positional, option,
  metavar, separator, description.
- User overrides are read from __main__.__styles__; styles are applied only
  when colorful is True.
"""
from collections import defaultdict

from rich.text import Text

from .arguments import Positional, Option, Separator

INDENT = " " * 2
GAP = 3


def render(grammar, prog=None, /, *, colorful=False):
    """
    Build the usage of `grammar` as a rich Text (use .plain for a string).
    """
    styles = defaultdict(str, {
        "usage-label": "bold #FF4D94",
        "program-name": "bold #E6E6F0",
        "options-label": "bold #FFD600",
        "positional": "#00E6FF",
        "option": "bold #00E6FF",
        "metavar": "italic #9CA3AF",
        "separator": "#6B6F7A",
        "description": "#C8C8D0",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def positional(argument):
        label = Text(argument.name, styler("positional"))
        if argument.repeated:
            label.append(" ...")
        if argument.optional:
            label = Text.assemble("[", label, "]")
        return label

    def names(argument):
        label = Text()
        for index, name in enumerate(argument.names):
            if index:
                label.append(", ")
            label.append(name, styler("option"))
            if argument.metavar:
                label.append(" ").append(argument.metavar, styler("metavar"))
        return label

    usage = Text()
    usage.append("usage", styler("usage-label")).append(": ")
    if prog:
        usage.append(prog, styler("program-name")).append(" ")
    if any(True for _ in grammar.options()):
        usage.append("[options] ")
    usage.append(Text(" ").join(map(positional, grammar.positionals())))
    usage.rstrip()

    rows = []
    for argument in grammar.arguments:
        match argument:
            case Separator(text=text):
                rows.append((Text(str(text), styler("separator")), None))
            case Option():
                rows.append((names(argument), argument.descr))
            case Positional(name=name):
                rows.append((Text(name, styler("positional")), argument.descr))

    width = max((len(label) for label, _ in rows), default=0) + GAP

    lines = Text()
    lines.append("options", styler("options-label")).append(":")
    for label, descr in rows:
        lines.append("\n").append(INDENT).append(label)
        if descr:
            lines.append(" " * (width - len(label)))
            if isinstance(descr, Text) and colorful:
                lines.append(descr)
            else:
                lines.append(str(descr), styler("description"))

    return Text.assemble(usage, "\n\n", lines, "\n")


__all__ = (
    "render",
)

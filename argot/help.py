"""
Argot help renderer: usage/help/version text and the exit disposition.

Dispatch (driven by the parser's reserved keys)
- "/" == "version": the program version alone.
- "/" == "help" with a "/command" topic: help for that command ("version" as a
  topic falls back to generic help).
- anything else: generic help (which is command help in single-command mode).

Disposition
- SUCCESS when help or version was explicitly requested, or on a bare invocation.
- USAGE_ERROR otherwise: the command line was malformed and help is a courtesy.

Layout
- wrap(): greedy word-wrap against a fixed line budget (LINE_LENGTH) with a
  continuation indent.
- layout(): two-pass column alignment. Pass one measures the widest intro
  (2 × MARGIN + name) of the listing, pass two pads every intro to it and wraps the
  description so continuation lines start under the description column.
  Widths are computed per call, never cached.

Styling
- Plain text by default. With colorful=True, spans are styled from a palette that
  the host can override through a __styles__ mapping in __main__.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum

from rich.console import Console
from rich.text import Text

from .parser import Parser
from .utils import *

MARGIN = 3
LINE_LENGTH = 97


class Disposition(IntEnum):
    """
    Process exit disposition of a help run.
    """
    SUCCESS = 0
    USAGE_ERROR = 1


def wrap(message, intro="", indent=MARGIN, width=LINE_LENGTH):
    """
    Greedy word-wrap of message behind an intro.

    - The intro is glued to the first word, so a padded intro puts the first word
      on its description column. An intro that does not fit the budget is emitted
      on its own line and the message starts on a fresh, unindented line.
    - A word goes on the current line unless that would make it longer than width;
      then the line is flushed and a new one starts with `indent` spaces.
    - A single word longer than the budget is never split.

    Returns the list of lines (no trailing newlines).
    """
    lines = []
    words = message.split()

    if len(intro) < width:
        if words:
            words[0] = intro + words[0]
        elif intro:
            words = [intro.rstrip()]
    else:
        lines.append(intro)

    line = ""
    started = False
    for word in words:
        if started and len(line) + len(word) + 1 > width:
            lines.append(line)
            line = " " * indent
            started = False
        if started:
            line += " "
        line += word
        started = True

    if started:
        lines.append(line)
    return lines


def _layout(rows, width=LINE_LENGTH):
    rows = list(rows)
    column = max((2 * MARGIN + len(name) for name, _ in rows), default=2 * MARGIN)
    for name, description in rows:
        intro = (" " * MARGIN + name).ljust(column)
        yield name, wrap(description or "", intro, indent=column, width=width)


def layout(rows, width=LINE_LENGTH):
    """
    Two-column layout of (name, description) rows; returns the wrapped lines.

    Every description starts at the same column: MARGIN plus the widest
    "MARGIN + name" intro of the listing.
    """
    return [line for _, lines in _layout(rows, width) for line in lines]


def placeholder(parameter, /):
    """
    Value placeholder of a parameter: "<identifier>" once per value token.
    """
    return " ".join(["<%s>" % parameter.identifier] * parameter.cardinality)


def _intro(parameter):
    if parameter.cardinality:
        return "%s %s" % (parameter.name, placeholder(parameter))
    return parameter.name


class Help:
    """
    Render help for a finished (failed) parse.

    Parameters
    - syntax / parser / arguments: the grammar, the parser that ran over it and its
      argument vector. The parser's result is read, never modified.
    - console: rich Console for the help text (default: stdout, rich never re-wraps lines).
    - errors: rich Console for diagnostics (default: stderr).
    - colorful: style the output with the palette.
    - diagnose: print the parser's fault before the help text on usage errors.
    """

    def __init__(self, syntax, parser, arguments, /, *, console=Unset, errors=Unset, colorful=False, diagnose=False):
        if not isinstance(parser, Parser):
            raise TypeError("Help() second argument must be a parser")
        self._syntax = syntax
        self._parser = parser
        self._arguments = arguments
        if console is Unset:
            console = Console(highlight=False, soft_wrap=True, emoji=False)
        if errors is Unset:
            errors = Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)
        self._console = console
        self._errors = errors
        self._colorful = bool(colorful)
        self._diagnose = bool(diagnose)
        self._styles = defaultdict(str, {
            # === Head sections ===
            "title": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "program-version": "bold #00E6FF",  # CYAN version
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
            "remarks-section": "italic #A3A3A3",  # Neutral gray
            "epilog-section": "#737373",  # Dim footer gray

            # === Listings ===
            "group-label": "bold #FFFFFF",  # Pure white headers
            "command-name": "bold #36C5F0",  # Sky-blue commands
            "parameter-name": "bold #22C55E",  # GREEN for parameters
            "description": "#9CA3AF",  # Muted gray
        } | getattr(sys.modules["__main__"], "__styles__", {}))

    @property
    def disposition(self):
        """
        SUCCESS for explicit help/version requests and bare invocations, else USAGE_ERROR.
        """
        if self._parser.result.command in ("help", "version"):
            return Disposition.SUCCESS
        if len(self._arguments) <= 1:
            return Disposition.SUCCESS
        return Disposition.USAGE_ERROR

    def _text(self, line, *spans):
        # spans: (style, start, end); end=None styles to the end of the line
        text = Text(line)
        if self._colorful:
            for style, start, end in spans:
                text.stylize(self._styles[style], start, end)
        return text

    def _paragraph(self, message, style, /, *, lead=None):
        """
        Wrap a free paragraph at the margin; lead styles the first line's prefix.
        """
        lines = []
        for index, line in enumerate(wrap(message, "", MARGIN)):
            if index == 0 and lead:
                head = len(line.split(" ", 1)[0])
                lines.append(self._text(line, (lead, 0, head), (style, head, None)))
            else:
                lines.append(self._text(line, (style, 0, None)))
        return lines

    def _listing(self, rows, style):
        lines = []
        for name, wrapped in _layout(rows):
            for index, line in enumerate(wrapped):
                if index == 0:
                    lines.append(self._text(line, (style, MARGIN, MARGIN + len(name)), ("description", MARGIN + len(name), None)))
                else:
                    lines.append(self._text(line, ("description", 0, None)))
        return lines

    def _title(self):
        return self._paragraph(
            "%s, version: %s" % (self._syntax.program_name, self._syntax.program_version), "title"
        )

    def _generic_help(self):
        commands = self._syntax.commands
        if len(commands) == 1:
            return self._command_help(commands[0])

        program = self._arguments.program
        lines = self._title()

        if not commands:
            lines += self._paragraph("Usage: %s [--version] [--help]" % program, "usage-section", lead="usage-label")
            return lines

        lines += self._paragraph(
            "Usage: %s [--version] [--help] <command> [<args>]" % program, "usage-section", lead="usage-label"
        )
        lines.append(Text(""))
        lines.append(self._text("Commands:", ("group-label", 0, None)))
        lines += self._listing(
            ((command.name, command.brief or command.remarks) for command in commands if command.names),
            "command-name",
        )
        lines.append(Text(""))
        lines += self._paragraph(
            "See '%s help <command>' to read about specific command." % program, "epilog-section"
        )
        return lines

    def _command_help(self, command):
        if command is None:
            return self._generic_help()

        usage = "Usage: " + self._arguments.program
        if len(self._syntax.commands) > 1:
            usage += " " + command.names[0]
        for parameter in command.parameters:
            usage += " <%s>" % _intro(parameter) if parameter.required else " [%s]" % _intro(parameter)

        lines = self._title()
        lines += self._paragraph(usage, "usage-section", lead="usage-label")

        if command.remarks:
            lines.append(Text(""))
            lines += self._paragraph(command.remarks, "remarks-section")

        if not command.parameters:
            return lines

        lines.append(Text(""))
        lines.append(self._text("Parameters:", ("group-label", 0, None)))
        lines += self._listing(
            ((_intro(parameter), parameter.remarks or parameter.brief) for parameter in command.parameters),
            "parameter-name",
        )
        return lines

    def render(self):
        """
        Build the help (or version) text as a list of rich Text lines, without printing.
        """
        result = self._parser.result
        if result.command == "version":
            return [self._text(self._syntax.program_version, ("program-version", 0, None))]
        if result.command == "help" and result.topic is not None and result.topic != "version":
            return self._command_help(self._syntax.find_command_by_identifier(result.topic))
        return self._generic_help()

    def run(self):
        """
        Print the help (and, with diagnose=True, the usage fault) and return the disposition.
        """
        disposition = self.disposition
        if self._diagnose and disposition is Disposition.USAGE_ERROR and self._parser.fault is not None:
            self._errors.print(copy.replace(self._parser.fault, colorful=self._colorful))
            self._errors.print()
        for line in self.render():
            self._console.print(line)
        return disposition


__all__ = (
    "Help",
    "Disposition",
    "MARGIN",
    "LINE_LENGTH",
    "wrap",
    "layout",
    "placeholder",
)

"""
Argot parser: match an argument vector against a Syntax.

Modes (selected by the number of registered commands)
- none: a bare invocation succeeds, anything else fails.
- one: the command is implicit; parameters start at argv[1].
- two or more: argv[1] selects the command; parameters start at argv[2].

Pseudo-commands (matched at argv[1], case-sensitive, whatever the mode)
- version, --version, -v: records "/" = "version" when it is the only extra token.
- help, --help, -h: records "/" = "help" when alone; "help <command>" (or
  "help version") also records the topic in "/command" when the syntax has two or
  more commands and the topic resolves.
Both always make parse() return False so the host routes through Help.

Result contract
- parse() returns True only for a fully valid invocation.
- On False the result must not be read as a success; Help inspects its reserved
  keys ("/" and "/command") to decide what to print.
- After a failed parse that was not a help/version request, `fault` holds a
  UsageFault describing the problem (recorded, never raised).
"""
import difflib
from collections.abc import Mapping

from .arguments import Arguments
from .faults import *
from .grammar import Syntax
from .results import ParseResult
from .utils import *

HELP_NAMES = ("help", "--help", "-h")
VERSION_NAMES = ("version", "--version", "-v")


class Parser(Mapping):
    """
    Grammar-driven parser over one Syntax and one argument vector.

    The parser is a read-only mapping view over its latest result, so hosts can
    write `parser["/p"]` as well as `parser.result["/p"]`.
    """

    def __init__(self, syntax, arguments, /):
        if not isinstance(syntax, Syntax):
            raise TypeError("Parser() first argument must be a syntax")
        if not isinstance(arguments, Arguments):
            arguments = Arguments(arguments)
        self._syntax = syntax
        self._arguments = arguments
        self._result = ParseResult()
        self._fault = None

    @property
    def syntax(self):
        return self._syntax

    @property
    def arguments(self):
        return self._arguments

    @property
    def result(self):
        return self._result

    @property
    def fault(self):
        return self._fault

    def __getitem__(self, key):
        return self._result[key]

    def __iter__(self):
        return iter(self._result)

    def __len__(self):
        return len(self._result)

    def __repr__(self):
        return "parser(%r)" % (self._result,)

    def _record(self, exception, message, /, **options):
        """
        Remember the first usage fault of this run, with program and docs filled in.
        """
        self._fault = exception(
            message,
            program=self._arguments.program,
            docs=getdoc(options["code"]),
            **options,
        )
        return False

    def parse(self):
        """
        Parse the argument vector; True means a valid invocation.

        phases
        - reset: every call starts from an empty result (parsing is deterministic).
        - mode selection: bare invocation, version/help pseudo-commands, implicit
          single command, or command lookup by name.
        - parameter consumption: see _parse_parameters().
        """
        self._result._clear()
        self._fault = None

        commands = self._syntax.commands
        selector = self._arguments[1]

        if selector is None and len(commands) != 1:
            if not commands:
                return True
            return self._record(
                MissingCommandError,
                "a command is required",
                title="missing command",
                code=FaultCode.MISSING_COMMAND,
                hint="run '%s help' to see available commands" % self._arguments.program,
            )

        if selector is not None and selector in VERSION_NAMES:
            self._parse_version()
            return False

        if selector is not None and selector in HELP_NAMES:
            self._parse_help()
            return False

        if len(commands) == 1:
            return self._parse_parameters(commands[0], 1)

        if (command := self._syntax.find_command_by_name(selector)) is None:
            return self._unknown_command(selector, 1)

        return self._parse_parameters(command, 2)

    def _parse_version(self):
        if len(self._arguments) == 2:
            self._result._insert("/", "version")
            return
        self._malformed_request(self._arguments[1])

    def _parse_help(self):
        if len(self._arguments) == 2:
            self._result._insert("/", "help")
            return

        if len(self._arguments) != 3 or len(self._syntax.commands) < 2:
            self._malformed_request(self._arguments[1])
            return

        topic = self._arguments[2]
        command = self._syntax.find_command_by_name(topic)
        if command is None and topic not in VERSION_NAMES:
            self._unknown_command(topic, 2)
            return

        self._result._insert("/", "help")
        self._result._insert("/command", command.identifier if command else "version")

    def _malformed_request(self, request):
        self._record(
            MalformedRequestError,
            "unexpected input after %r" % request,
            title="malformed request",
            code=FaultCode.MALFORMED_REQUEST,
            input=request,
            index=1,
            hint="run '%s %s' by itself" % (self._arguments.program, request)
            if request in VERSION_NAMES or len(self._syntax.commands) < 2
            else "run '%s %s' alone or followed by a single command name" % (self._arguments.program, request),
        )

    def _unknown_command(self, token, index):
        program = self._arguments.program
        if not self._syntax.commands:
            return self._record(
                UnknownCommandError,
                "unexpected argument %r at %s position" % (token, ordinal(index)),
                title="unexpected argument",
                code=FaultCode.UNKNOWN_COMMAND,
                input=token,
                index=index,
                suggestions=[],
                hint="%s takes no arguments; run '%s --version' or '%s --help'" % (program, program, program),
            )

        names = [name for command in self._syntax.commands for name in command.names]
        suggestions = difflib.get_close_matches(token, names, 5)
        try:
            hint = "did you mean %r? you can also run '%s help' to see available commands" % (suggestions[0], program)
        except IndexError:
            hint = "run '%s help' to see available commands" % program

        return self._record(
            UnknownCommandError,
            "unknown command %r at %s position" % (token, ordinal(index)),
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            input=token,
            index=index,
            suggestions=suggestions,
            hint=hint,
        )

    def _usage_hint(self, command):
        program = self._arguments.program
        if len(self._syntax.commands) > 1:
            return "run '%s help %s' to see the expected usage" % (program, command.short)
        return "run '%s --help' to see the expected usage" % program

    def _parse_parameters(self, command, index):
        """
        Consume parameter tokens for a resolved command, starting at argv[index].

        rules
        - every token must name a parameter of the command (exact match).
        - a parameter consumes `cardinality` value tokens; fewer remaining is a failure.
        - a parameter may be given once (aliases count as the same parameter).
        - once the scan completes, every required parameter must be present.

        recording
        - cardinality 0: "/<id>" = ""
        - cardinality 1: "/<id>" = value
        - cardinality N: "/<id>/0" .. "/<id>/<N-1>" (no plain "/<id>" key)
        """
        if len(self._syntax.commands) > 1:
            self._result._insert("/", command.identifier)

        count = len(self._arguments)
        while index < count:
            token, position = self._arguments[index], index
            index += 1

            if (parameter := self._syntax.find_parameter_by_name(command, token)) is None:
                names = [name for other in command.parameters for name in other.names]
                suggestions = difflib.get_close_matches(token, names, 5)
                try:
                    hint = "did you mean %r? %s" % (suggestions[0], self._usage_hint(command))
                except IndexError:
                    hint = self._usage_hint(command)
                return self._record(
                    UnknownParameterError,
                    "unknown parameter %r at %s position" % (token, ordinal(position)),
                    title="unknown parameter",
                    code=FaultCode.UNKNOWN_PARAMETER,
                    input=token,
                    index=position,
                    suggestions=suggestions,
                    hint=hint,
                )

            if index + parameter.cardinality > count:
                return self._record(
                    NotEnoughValuesError,
                    "parameter %r at %s position expects %d value(s) but %d remain" % (
                        token, ordinal(position), parameter.cardinality, count - index
                    ),
                    title="not enough values",
                    code=FaultCode.NOT_ENOUGH_VALUES,
                    input=token,
                    index=position,
                    argument=parameter,
                    hint=self._usage_hint(command),
                )

            values = self._arguments[index:index + parameter.cardinality]
            index += parameter.cardinality

            if self._result.has(parameter.identifier):
                return self._record(
                    DuplicatedParameterError,
                    "parameter %r at %s position was already provided" % (token, ordinal(position)),
                    title="duplicated parameter",
                    code=FaultCode.DUPLICATED_PARAMETER,
                    input=token,
                    index=position,
                    argument=parameter,
                    hint="keep a single %r; each parameter can be specified only once" % parameter.name,
                )

            match parameter.cardinality:
                case 0:
                    self._result._insert("/" + parameter.identifier, "")
                case 1:
                    self._result._insert("/" + parameter.identifier, values[0])
                case _:
                    for offset, value in enumerate(values):
                        self._result._insert("/%s/%d" % (parameter.identifier, offset), value)

        missing = [
            parameter for parameter in command.parameters
            if parameter.required and not self._result.has(parameter.identifier)
        ]
        if missing:
            return self._record(
                MissingParametersError,
                "missing required parameter(s): %s" % ", ".join(parameter.name for parameter in missing),
                title="missing parameters",
                code=FaultCode.MISSING_PARAMETERS,
                missing=[parameter.identifier for parameter in missing],
                hint=self._usage_hint(command),
            )

        return True


__all__ = (
    "Parser",
    "HELP_NAMES",
    "VERSION_NAMES",
)

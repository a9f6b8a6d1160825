r"""
Argot grammar model: the command-line surface of one tool.

Overview
- Parameter: a named token belonging to one Command; optionally required, consuming
  a fixed number of value tokens (its cardinality: 0 = flag, 1 = single value, N = N values).
- Command: a named sub-grammar holding an ordered sequence of Parameters.
- Syntax: the whole grammar (program name, program version, ordered Commands).

Building
    >>> syntax = Syntax("Loro device programmer", "2.1.32.7")
    >>> syntax.add(Command("program", "program", brief="Programs device with specified file."))
    >>> syntax.add(Parameter("device-name", "-d", "--device", remarks="Name of a device.", cardinality=1))
    >>> syntax.add(Parameter("program-file-path", "-p", remarks="Program file path.", required=True, cardinality=1))

  add(Parameter) appends to the most recently added Command. The number of Commands
  selects the parse mode: none (nothing to parse), one (the command is implicit and
  never typed), two or more (the first token selects the command).

Introspection & representation
- GrammarType metaclass provides stable __repr__/__rich_repr__ and exposes the fields
  listed in __introspectable__ as read-only properties (containers are copied out).
- The model is read-only once parsing starts; nothing here is mutated by the parser
  or the help renderer.

Misuse (orphaned parameters, duplicated identifiers or names)
- Non-strict syntaxes keep the historical behavior (orphans are dropped, duplicates are
  kept and the first match wins) and emit a GrammarWarning.
- Strict syntaxes raise the matching GrammarError and stay unchanged.

Public API
- Classes: Parameter, Command, Syntax
"""
import functools
import operator
import re

from .faults import *
from .utils import *


class GrammarType(type):
    """
    Metaclass that turns grammar classes into introspectable, read-only records.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all names
      listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ for diagnostics and rich UI.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      for consistent, human-friendly labels in errors.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - parameter(identifier='force', names=('-f',), ...)
            """
            fields = ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            return "%s(%s)" % (type(self).__typename__, fields)
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_identity(cls, metadata, /, *, least, most):
    """
    Internal: validate and normalize 'identifier' and 'names'.

    - identifier: required non-empty string (trimmed).
    - names: between 'least' and 'most' non-empty strings (trimmed), no inner
      whitespace (a name is matched against a single argv token), no duplicates.
      Registration order is kept.

    Raises
    - TypeError: wrong types or wrong number of names.
    - ValueError: empty values, whitespace inside a name, or duplicates.
    """
    if not isinstance(identifier := metadata["identifier"], str):
        raise TypeError(f"{cls.__typename__} 'identifier' must be a string")
    elif not (identifier := identifier.strip()):
        raise ValueError(f"{cls.__typename__} 'identifier' cannot be empty")
    metadata["identifier"] = identifier

    if not least <= len(metadata["names"]) <= most:
        if least == most:
            raise TypeError(f"{cls.__typename__} must specify exactly {least} name(s)")
        raise TypeError(f"{cls.__typename__} must specify between {least} and {most} names")

    names = []
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif re.search(r"\s", name):
            raise ValueError(f"{cls.__typename__} names cannot contain whitespace")
        elif name in names:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        names.append(name)
    metadata["names"] = tuple(names)


def _sanitize_texts(cls, metadata, /):
    """
    Internal: validate and normalize the help texts ('brief' and 'remarks').

    Unset becomes None; provided strings are trimmed and must not be empty.
    """
    for name in ("brief", "remarks"):
        if not isinstance(object := metadata[name], str | Unset):
            raise TypeError(f"{cls.__typename__} {name!r} must be a string")
        elif isinstance(object, str) and not (object := object.strip()):
            raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
        metadata[name] = coalesce(object)


def _short(names):
    return min(names, key=len) if names else None


def _full(names):
    return max(names, key=len) if len(names) > 1 else None


class Parameter(metaclass=GrammarType):
    """
    Named parameter of a Command.

    Highlights
    - identifier: stable machine key, used in result keys ("/<identifier>").
    - names: one or two user-facing tokens (short/full pair), matched exactly.
    - required: the command line is invalid when the parameter is missing.
    - cardinality: number of value tokens consumed after the name
      (0 = flag, 1 = single value, N > 1 = fixed-arity multi-value).
    """

    __introspectable__ = (
        "identifier",
        "names",
        "brief",
        "remarks",
        "required",
        "cardinality",
    )

    def __new__(
            cls,
            identifier,
            /,
            *names,
            brief=Unset,
            remarks=Unset,
            required=False,
            cardinality=0,
    ):
        """
        Construct a Parameter.

        Parameters
        - identifier: str
        - names: one or two str (e.g. "-d", "--device")
        - brief / remarks: Unset | str (help texts; Unset becomes None)
        - required: bool
        - cardinality: int >= 0 (bool is rejected)
        """
        metadata = {
            "identifier": identifier,
            "names": names,
            "brief": brief,
            "remarks": remarks,
            "required": bool(required),
            "cardinality": cardinality,
        }
        _sanitize_identity(cls, metadata, least=1, most=2)
        _sanitize_texts(cls, metadata)

        if not isinstance(cardinality, int) or isinstance(cardinality, bool):
            raise TypeError(f"{cls.__typename__} 'cardinality' must be an integer")
        elif cardinality < 0:
            raise ValueError(f"{cls.__typename__} 'cardinality' cannot be negative")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def short(self):
        return _short(self._names)

    @property
    def full(self):
        return _full(self._names)

    @property
    def name(self):
        """
        Display name: every alias joined with " | " (e.g. "-d | --device").
        """
        return " | ".join(self._names)

    def matches(self, token, /):
        return token in self._names


class Command(metaclass=GrammarType):
    """
    Named sub-grammar: a command and its ordered parameters.

    A Command may have no name at all; it is then only reachable as the implicit
    command of a single-command syntax and is not listed in generic help.
    """

    __introspectable__ = (
        "identifier",
        "names",
        "brief",
        "remarks",
        "parameters",
    )

    def __new__(
            cls,
            identifier,
            /,
            *names,
            brief=Unset,
            remarks=Unset,
    ):
        metadata = {
            "identifier": identifier,
            "names": names,
            "brief": brief,
            "remarks": remarks,
        }
        _sanitize_identity(cls, metadata, least=0, most=2)
        _sanitize_texts(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._parameters = []
        return self

    @property
    def short(self):
        return _short(self._names)

    @property
    def full(self):
        return _full(self._names)

    @property
    def name(self):
        return " | ".join(self._names)

    def matches(self, token, /):
        return token in self._names

    def find_parameter(self, token, /):
        """
        Return the first parameter matching token (registration order), else None.
        """
        for parameter in self._parameters:
            if parameter.matches(token):
                return parameter
        return None


class Syntax(metaclass=GrammarType):
    """
    Whole grammar of one tool.

    Properties
    - program_name / program_version: display strings for help and version output.
    - commands: ordered tuple of Commands.
    - strict: raise GrammarError on builder misuse instead of warning.
    """

    __introspectable__ = (
        "program_name",
        "program_version",
        "commands",
        "strict",
    )

    def __new__(cls, program_name, program_version, /, *, strict=False):
        for name, object in (("program_name", program_name), ("program_version", program_version)):
            if not isinstance(object, str):
                raise TypeError(f"{cls.__typename__} {name!r} must be a string")
            elif not object.strip():
                raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")

        self = super().__new__(cls)
        self._program_name = program_name.strip()
        self._program_version = program_version.strip()
        self._commands = []
        self._strict = bool(strict)
        return self

    def _misuse(self, error, warning, message, /, **options):
        trigger((error if self._strict else warning)(message, **options))

    def _add_command(self, command):
        for other in self._commands:
            if other.identifier == command.identifier:
                self._misuse(
                    DuplicatedIdentifierError,
                    DuplicatedIdentifierWarning,
                    "command identifier %r is already in use" % command.identifier,
                    code=FaultCode.DUPLICATED_IDENTIFIER,
                    item=command,
                )
            for name in command.names:
                if other.matches(name):
                    self._misuse(
                        DuplicatedNameError,
                        DuplicatedNameWarning,
                        "command name %r is already in use" % name,
                        code=FaultCode.DUPLICATED_NAME,
                        item=command,
                    )
        self._commands.append(command)

    def _add_parameter(self, parameter):
        if not self._commands:
            self._misuse(
                OrphanedParameterError,
                OrphanedParameterWarning,
                "parameter %r was added before any command and is dropped" % parameter.identifier,
                code=FaultCode.ORPHANED_PARAMETER,
                item=parameter,
            )
            return

        command = self._commands[-1]
        for other in command._parameters:
            if other.identifier == parameter.identifier:
                self._misuse(
                    DuplicatedIdentifierError,
                    DuplicatedIdentifierWarning,
                    "parameter identifier %r is already in use by command %r" % (
                        parameter.identifier, command.identifier
                    ),
                    code=FaultCode.DUPLICATED_IDENTIFIER,
                    item=parameter,
                )
            for name in parameter.names:
                if other.matches(name):
                    self._misuse(
                        DuplicatedNameError,
                        DuplicatedNameWarning,
                        "parameter name %r is already in use by command %r" % (name, command.identifier),
                        code=FaultCode.DUPLICATED_NAME,
                        item=parameter,
                    )
        command._parameters.append(parameter)

    def add(self, item, /):
        """
        Append a Command, or a Parameter to the most recently added Command.

        Returns the syntax itself so calls can be chained.

        Raises
        - TypeError: item is neither a Command nor a Parameter.
        - GrammarError subclasses on misuse when the syntax is strict.
        """
        match item:
            case Command():
                self._add_command(item)
            case Parameter():
                self._add_parameter(item)
            case _:
                raise TypeError(f"{type(self).__typename__} add() argument must be a command or a parameter")
        return self

    def find_command_by_name(self, token, /):
        """
        Return the first command (registration order) having token as a name, else None.
        """
        for command in self._commands:
            if command.matches(token):
                return command
        return None

    def find_command_by_identifier(self, identifier, /):
        for command in self._commands:
            if command.identifier == identifier:
                return command
        return None

    def find_parameter_by_name(self, command, token, /):
        """
        Return the first parameter of command having token as a name, else None.
        """
        return command.find_parameter(token)


__all__ = (
    "Parameter",
    "Command",
    "Syntax",
)

"""
Argot faults (usage faults, grammar errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the package
  can report. Codes are grouped by domain to keep copy consistent and make
  logs/searches predictable.
- UsageFault: what went wrong with a command line. The parser never raises these;
  it records one on a failed parse so hosts (and Help with diagnose=True) can show it.
- GrammarError / GrammarWarning: misuse of the grammar builder (orphaned
  parameters, duplicated identifiers or names). Strict syntaxes raise the error,
  the others emit the warning.
- trigger(): central entry point to surface a grammar fault.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: usage faults name the ordinal position of the token
  (“at third position”) so users can learn by trying.
- Short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).
"""
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset, coalesce


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_COMMAND, MISSING_COMMAND
    - parameters (1111x/1112x)
      • UNKNOWN_PARAMETER, DUPLICATED_PARAMETER, NOT_ENOUGH_VALUES, MISSING_PARAMETERS
    - requests (1114x)
      • MALFORMED_REQUEST (help/version followed by unexpected tokens)
    - grammar (131xx)
      • ORPHANED_PARAMETER, DUPLICATED_IDENTIFIER, DUPLICATED_NAME

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND             = 11101
    MISSING_COMMAND             = 11102

    # --- parameter errors (11xxx) ---
    UNKNOWN_PARAMETER           = 11112
    DUPLICATED_PARAMETER        = 11115
    NOT_ENOUGH_VALUES           = 11122
    MISSING_PARAMETERS          = 11125

    # --- request errors (11xxx) ---
    MALFORMED_REQUEST           = 11141

    # --- grammar misuse (13xxx) ---
    ORPHANED_PARAMETER          = 13101
    DUPLICATED_IDENTIFIER       = 13102
    DUPLICATED_NAME             = 13103

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(sys.modules["__main__"], "__codes__", {}).get(self, self.value))


def _palette(defaults):
    return defaultdict(str, defaults | getattr(sys.modules["__main__"], "__styles__", {}))


class UsageFault(Exception):
    """
    A malformed command line, described for humans.

    Options (read-only mapping)
    - code: FaultCode
    - title: short lowercase title
    - hint: one actionable sentence
    - program: invocable name used in the header
    - input/index: offending token and its argv position, when there is one
    - colorful: style the rendering (default False)
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        styles = _palette({
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

        colorful = self.options.get("colorful", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        header = Text.assemble(
            "[ ",
            text(self.options.get("program", ""), "prog-name"),
            " — ",
            text(self.code.normalize() if self.code else "", "code"),
            " | ",
            text(str(self.options.get("title", "")).title(), "error-title"),
            " ]",
        )
        message = text(self.message, "error-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options.get("hint", ""), "hint"))
        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownCommandError(UsageFault): ...
class MissingCommandError(UsageFault): ...
class UnknownParameterError(UsageFault): ...
class DuplicatedParameterError(UsageFault): ...
class NotEnoughValuesError(UsageFault): ...
class MissingParametersError(UsageFault): ...
class MalformedRequestError(UsageFault): ...


class GrammarError(Exception):
    """
    Misuse of the grammar builder detected by a strict Syntax.
    """

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __trigger__(self):
        raise self


class OrphanedParameterError(GrammarError): ...
class DuplicatedIdentifierError(GrammarError): ...
class DuplicatedNameError(GrammarError): ...


class GrammarWarning(Warning):
    """
    Misuse of the grammar builder tolerated by a non-strict Syntax.
    """

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __trigger__(self):
        # attributed to the caller of Syntax.add()
        warnings.warn(self, stacklevel=6)


class OrphanedParameterWarning(GrammarWarning): ...
class DuplicatedIdentifierWarning(GrammarWarning): ...
class DuplicatedNameWarning(GrammarWarning): ...


def trigger(fault, /):
    """
    surface a grammar fault.

    contract
    - fault must provide a callable __trigger__ (see GrammarError/GrammarWarning).
    - errors are raised; warnings are emitted through the warnings module.
    """
    if not hasattr(fault, "__trigger__") or not callable(fault.__trigger__):
        raise TypeError("trigger() argument must have a __trigger__ method")
    fault.__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(sys.modules["__main__"], "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "UsageFault",
    "UnknownCommandError",
    "MissingCommandError",
    "UnknownParameterError",
    "DuplicatedParameterError",
    "NotEnoughValuesError",
    "MissingParametersError",
    "MalformedRequestError",
    "GrammarError",
    "OrphanedParameterError",
    "DuplicatedIdentifierError",
    "DuplicatedNameError",
    "GrammarWarning",
    "OrphanedParameterWarning",
    "DuplicatedIdentifierWarning",
    "DuplicatedNameWarning",
    "trigger",
    "getdoc",
)

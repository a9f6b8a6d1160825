"""
Argot argument source: a read-only, bounds-checked view over the raw argv.

Token 0 is the invocable's own path; it is never inspected for grammar purposes,
only to derive the program's display name for help output.

Accepted inputs
- Unset: read sys.argv.
- str: shell-like string split with shlex.split (the program token included).
- Iterable[str]: pre-tokenized vector, taken as-is.
"""
import shlex
import sys
from collections.abc import Iterable, Sequence

from .utils import *


class Arguments(Sequence):
    """
    Read-only view over the process argument vector.

    Indexing past the end yields None instead of raising, so the parser can probe
    "the token after this one" without separate length checks.
    """

    def __init__(self, argv=Unset, /):
        if argv is Unset:
            tokens = list(sys.argv)
        elif isinstance(argv, str):
            tokens = shlex.split(argv)
        elif isinstance(argv, Iterable):
            tokens = list(argv)
            for token in tokens:
                if not isinstance(token, str):
                    raise TypeError("Arguments() argument must be a string or an iterable of strings")
        else:
            raise TypeError("Arguments() argument must be a string or an iterable of strings")
        self._tokens = tuple(tokens)

    def __len__(self):
        return len(self._tokens)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._tokens[index]
        if index < 0:
            raise IndexError("Arguments index must be non-negative")
        return self._tokens[index] if index < len(self._tokens) else None

    def __iter__(self):
        return iter(self._tokens)

    def __repr__(self):
        return "arguments(%r)" % (self._tokens,)

    def __rich_repr__(self):
        yield from self._tokens

    @property
    def program(self):
        """
        Invocable display name: argv[0] without its directory part ('/' or '\\').
        """
        if not self._tokens:
            return ""
        path = self._tokens[0]
        for separator in ("/", "\\"):
            if separator in path:
                return path.rsplit(separator, 1)[1]
        return path


__all__ = (
    "Arguments",
)

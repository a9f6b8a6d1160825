"""
Argot parse results: the ordered key → value mapping produced by the parser.

Keys
- "/"                  matched command identifier, or "help" / "version"
- "/command"           help topic: a command identifier or "version"
- "/<identifier>"      a matched parameter of cardinality 0 ("") or 1 (its value)
- "/<identifier>/<n>"  the n-th value (0-based) of a parameter of cardinality > 1;
                       the plain "/<identifier>" key is absent for those

Insertion order is preserved and is the only iteration order. Iteration is lazy,
finite and restartable: items() can be walked any number of times.
"""
from collections.abc import Mapping


class ParseResult(Mapping):
    """
    Read-only, insertion-ordered mapping of parse results.

    Only the parser writes into it (insert-if-absent); hosts read it.
    """

    def __init__(self):
        self._entries = {}

    def __getitem__(self, key):
        return self._entries[key]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return "parse-result(%r)" % (self._entries,)

    def __rich_repr__(self):
        yield from self._entries.items()

    def _insert(self, key, value):
        """
        Insert key unless already present; report whether it was inserted.
        """
        if key in self._entries:
            return False
        self._entries[key] = value
        return True

    def _clear(self):
        self._entries.clear()

    @property
    def command(self):
        return self._entries.get("/")

    @property
    def topic(self):
        return self._entries.get("/command")

    def has(self, identifier, /):
        """
        Whether the parameter with this identifier was matched (any cardinality).
        """
        return "/" + identifier in self._entries or "/%s/0" % identifier in self._entries

    def value(self, identifier, default=None, /):
        return self._entries.get("/" + identifier, default)

    def values_of(self, identifier, /):
        """
        The values of a multi-value parameter ("/<identifier>/<n>" keys), in order.
        """
        values = []
        while (key := "/%s/%d" % (identifier, len(values))) in self._entries:
            values.append(self._entries[key])
        return tuple(values)


__all__ = (
    "ParseResult",
)

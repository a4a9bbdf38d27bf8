"""Immutable, case-insensitive, multi-value HTTP header collection."""
from carafe.exceptions import InvalidArgumentError

_WHITESPACE = " \t"


def _check_name(name):
    if not isinstance(name, str):
        raise InvalidArgumentError("Header name must be a string")
    return name


def _validate(name, value):
    """Validate a header name and value(s), returning the trimmed values."""
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError("Header name must be non-empty string")
    if isinstance(value, (list, tuple)):
        values = value
        if not values:
            raise InvalidArgumentError("Header values must be non-empty strings")
    else:
        values = (value,)
    trimmed = []
    for v in values:
        if not isinstance(v, str):
            raise InvalidArgumentError("Header values must be non-empty strings")
        v = v.strip(_WHITESPACE)
        if not v:
            raise InvalidArgumentError("Header values must be non-empty strings")
        trimmed.append(v)
    return tuple(trimmed)


class Headers:
    """Case-insensitive header collection with copy-on-write mutators.

    Entries are keyed by the lower-cased header name and remember the name
    as it was first supplied. Instances never change after construction:
    ``with_header``, ``with_added_header`` and ``without_header`` return a
    new collection.

    ::

        h = Headers({"Content-Type": "text/html"})
        h2 = h.with_added_header("Accept", ["text/html", "application/json"])
        h2.get_header_line("accept")  # 'text/html, application/json'
    """

    __slots__ = ("_entries",)

    def __init__(self, headers=None):
        entries = {}
        if headers is not None:
            pairs = headers.items() if hasattr(headers, "items") else headers
            for name, value in pairs:
                _add(entries, name, _validate(name, value))
        self._entries = entries

    @classmethod
    def _from_entries(cls, entries):
        new = cls.__new__(cls)
        new._entries = entries
        return new

    def has_header(self, name):
        return _check_name(name).lower() in self._entries

    def get_header(self, name):
        entry = self._entries.get(_check_name(name).lower())
        if entry is None:
            return []
        return list(entry[1])

    def get_header_line(self, name):
        return ", ".join(self.get_header(name))

    def with_header(self, name, value):
        values = _validate(name, value)
        entries = dict(self._entries)
        # replaced headers move to the end, like a fresh insertion
        entries.pop(name.lower(), None)
        entries[name.lower()] = (name, values)
        return self._from_entries(entries)

    def with_added_header(self, name, value):
        values = _validate(name, value)
        entries = dict(self._entries)
        _add(entries, name, values)
        return self._from_entries(entries)

    def without_header(self, name):
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError("Header name must be non-empty string")
        normalized = name.lower()
        if normalized not in self._entries:
            return self
        entries = dict(self._entries)
        del entries[normalized]
        return self._from_entries(entries)

    def all(self):
        """Return ``{canonical name: [values]}`` in insertion order."""
        return {name: list(values) for name, values in self._entries.values()}

    def items(self):
        return [(name, list(values)) for name, values in self._entries.values()]

    def to_list(self):
        """Flatten to ``(name, value)`` pairs, one per value."""
        return [
            (name, v)
            for name, values in self._entries.values()
            for v in values
        ]

    def __contains__(self, name):
        return isinstance(name, str) and name.lower() in self._entries

    def __iter__(self):
        return (name for name, _ in self._entries.values())

    def __len__(self):
        return len(self._entries)

    def __eq__(self, other):
        if not isinstance(other, Headers):
            return NotImplemented
        return list(self._entries.items()) == list(other._entries.items())

    def __hash__(self):
        return hash(tuple(self._entries.items()))

    def __repr__(self):
        return f"Headers({self.all()!r})"


def _add(entries, name, values):
    normalized = name.lower()
    existing = entries.get(normalized)
    if existing is None:
        entries[normalized] = (name, values)
    else:
        entries[normalized] = (existing[0], existing[1] + values)

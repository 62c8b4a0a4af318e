"""Composite attribute builders and value formatting.

Two mutable, ordered collections back the composite attribute kinds:

- DelimitedSequence: values joined by one delimiter (``class="a b"``,
  ``coords="1,2,3"``)
- KeyValueList: ``key:value`` entries joined by an entry delimiter
  (``style="color:red;display:block"``)

Both render into any Writer. Element renders them into a scratch
StringBuilder and merges the resulting string with its scalar attributes.

Scalar formatting lives here as well: format_int and format_float produce
the canonical text for numeric attributes.

Thread Safety:
Builders are owned by a single element and are mutated only during tree
construction. Rendering never mutates them.

"""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Iterator, Mapping
from decimal import Decimal
from typing import Generic, TypeVar

from speckles.errors import BuilderError
from speckles.protocols import Writer

T = TypeVar("T", bound=Hashable)

# Decimal exponent at or above which floats switch to exponent notation
_EXPONENT_THRESHOLD = 6


def format_int(value: int) -> str:
    """Format an integer attribute value.

    Args:
        value: Integer (bools are accepted and formatted as 0/1)

    Returns:
        Decimal representation

    Raises:
        ValueError: value is not an integer
    """
    return format(value, "d")


def format_float(value: float) -> str:
    """Format a float attribute value using the shortest round-trip form.

    Integral values carry no fractional part, exponent notation is used when
    the decimal exponent is below -4 or at least 6, and the exponent always
    has a sign and at least two digits.

    Examples:
        >>> format_float(1.0)
        '1'
        >>> format_float(0.048)
        '0.048'
        >>> format_float(1e6)
        '1e+06'
        >>> format_float(0.00001)
        '1e-05'
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    prefix = "-" if sign else ""
    exp10 = len(digits) + exponent - 1

    if exp10 < -4 or exp10 >= _EXPONENT_THRESHOLD:
        mantissa = str(digits[0])
        if len(digits) > 1:
            mantissa += "." + "".join(str(d) for d in digits[1:])
        exp_sign = "-" if exp10 < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(exp10):02d}"

    positional = Decimal((0, digits, exponent))
    return prefix + format(positional, "f")


def format_value(value: object) -> str:
    """Format one element of a delimited attribute.

    Bools are lowercase, numbers use format_int and format_float, anything
    else is converted with str().
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return format_int(value)
    if isinstance(value, float):
        return format_float(value)
    return str(value)


class DelimitedSequence(Generic[T]):
    """Ordered values rendered joined by a fixed delimiter.

    Usage:
        >>> seq = DelimitedSequence[str](" ")
        >>> seq.add("btn", "hidden", "large").remove("hidden")
        >>> str(seq)
        'btn large'

    Duplicates are kept; remove() drops every occurrence.
    """

    __slots__ = ("_delimiter", "_values")

    def __init__(self, delimiter: str, values: Iterable[T] = ()) -> None:
        self._delimiter = delimiter
        self._values: list[T] = list(values)

    @property
    def delimiter(self) -> str:
        return self._delimiter

    def add(self, *values: T) -> DelimitedSequence[T]:
        """Append values in the given order.

        Returns:
            self for method chaining
        """
        self._values.extend(values)
        return self

    def remove(self, *values: T) -> DelimitedSequence[T]:
        """Remove every element equal to any of ``values``.

        Survivors keep their relative order.

        Returns:
            self for method chaining
        """
        to_remove = set(values)
        n = 0
        for value in self._values:
            if value not in to_remove:
                self._values[n] = value
                n += 1
        del self._values[n:]
        return self

    def extend_split(self, text: str) -> DelimitedSequence[T]:
        """Split ``text`` on the delimiter and add the non-empty tokens.

        A whitespace delimiter splits on any run of whitespace.

        Returns:
            self for method chaining
        """
        if self._delimiter.strip():
            tokens = (t.strip() for t in text.split(self._delimiter))
        else:
            tokens = iter(text.split())
        self._values.extend(t for t in tokens if t)  # type: ignore[misc]
        return self

    def clear(self) -> DelimitedSequence[T]:
        self._values.clear()
        return self

    def render(self, w: Writer) -> None:
        """Write the values joined by the delimiter (nothing when empty)."""
        for i, value in enumerate(self._values):
            if i:
                w.write(self._delimiter)
            w.write(format_value(value))

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[T]:
        return iter(self._values)

    def __str__(self) -> str:
        return self._delimiter.join(format_value(v) for v in self._values)

    def __repr__(self) -> str:
        return f"DelimitedSequence({self._delimiter!r}, {self._values!r})"


class KeyValueList:
    """Insertion-ordered key/value entries with upsert semantics.

    Usage:
        >>> kv = KeyValueList(":", ";")
        >>> kv.add("color", "red").add("display", "none").add("color", "blue")
        >>> str(kv)
        'color:blue;display:none'

    An auxiliary key -> position index keeps lookups O(1).
    """

    __slots__ = ("_pair_delimiter", "_entry_delimiter", "_entries", "_index")

    def __init__(self, pair_delimiter: str, entry_delimiter: str) -> None:
        self._pair_delimiter = pair_delimiter
        self._entry_delimiter = entry_delimiter
        self._entries: list[list[str]] = []
        self._index: dict[str, int] = {}

    @property
    def pair_delimiter(self) -> str:
        return self._pair_delimiter

    @property
    def entry_delimiter(self) -> str:
        return self._entry_delimiter

    def add(self, key: str, value: str) -> KeyValueList:
        """Set ``key`` to ``value``.

        An existing key keeps its position; a new key is appended.

        Raises:
            BuilderError: key is empty

        Returns:
            self for method chaining
        """
        if not key:
            raise BuilderError("key must not be empty")
        i = self._index.get(key)
        if i is not None:
            self._entries[i][1] = value
        else:
            self._entries.append([key, value])
            self._index[key] = len(self._entries) - 1
        return self

    def remove(self, *keys: str) -> KeyValueList:
        """Remove entries by key. Absent keys are ignored.

        Returns:
            self for method chaining
        """
        for key in keys:
            idx = self._index.pop(key, None)
            if idx is None:
                continue
            del self._entries[idx]
            for j in range(idx, len(self._entries)):
                self._index[self._entries[j][0]] = j
        return self

    def update(self, mapping: Mapping[str, str]) -> KeyValueList:
        """Add every entry of ``mapping`` in sorted key order.

        Returns:
            self for method chaining
        """
        for key in sorted(mapping):
            self.add(key, mapping[key])
        return self

    def add_pairs(self, *pairs: str) -> KeyValueList:
        """Add flat ``key, value, key, value, ...`` arguments.

        Raises:
            BuilderError: odd number of arguments

        Returns:
            self for method chaining
        """
        if len(pairs) % 2:
            raise BuilderError(f"expected key/value pairs, got {len(pairs)} arguments")
        for i in range(0, len(pairs), 2):
            self.add(pairs[i], pairs[i + 1])
        return self

    def parse(self, text: str) -> KeyValueList:
        """Add entries parsed from ``"key: value; key2: value2;"`` text.

        Keys and values are stripped of surrounding whitespace. One trailing
        entry delimiter is tolerated.

        Raises:
            BuilderError: an entry is empty, lacks the pair delimiter, or has
                an empty key

        Returns:
            self for method chaining
        """
        entries = text.split(self._entry_delimiter)
        if entries and not entries[-1].strip():
            entries.pop()

        parsed: list[tuple[str, str]] = []
        for entry in entries:
            key, sep, value = entry.partition(self._pair_delimiter)
            key = key.strip()
            if not sep or not key:
                raise BuilderError(f"malformed entry {entry!r} in {text!r}")
            parsed.append((key, value.strip()))

        for key, value in parsed:
            self.add(key, value)
        return self

    def get(self, key: str, default: str | None = None) -> str | None:
        i = self._index.get(key)
        return default if i is None else self._entries[i][1]

    def items(self) -> list[tuple[str, str]]:
        return [(k, v) for k, v in self._entries]

    def clear(self) -> KeyValueList:
        self._entries.clear()
        self._index.clear()
        return self

    def render(self, w: Writer) -> None:
        """Write ``key<pair>value`` entries joined by the entry delimiter."""
        for i, (key, value) in enumerate(self._entries):
            if i:
                w.write(self._entry_delimiter)
            w.write(key)
            w.write(self._pair_delimiter)
            w.write(value)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __str__(self) -> str:
        return self._entry_delimiter.join(
            f"{k}{self._pair_delimiter}{v}" for k, v in self._entries
        )

    def __repr__(self) -> str:
        return (
            f"KeyValueList({self._pair_delimiter!r}, {self._entry_delimiter!r}, "
            f"{self.items()!r})"
        )

"""Attribute-kind descriptors.

Generators that emit typed wrappers for a markup vocabulary describe each
attribute with one of these kinds. Every kind knows how to apply a value to
an Element, routing it to the store that kind renders from:

    >>> coords = DelimitedKind.comma_delimited()
    >>> coords.apply(element("area"), "coords", "1,2,3")

Kinds are frozen dataclasses and safe to share.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from speckles.element import COLON, COMMA, SEMICOLON, SPACE, Element
from speckles.errors import BuilderError


@dataclass(frozen=True, slots=True)
class BoolKind:
    """Present when true, absent when false."""

    def apply(self, el: Element, name: str, value: bool = True) -> Element:
        return el.bool_attr(name, value)


@dataclass(frozen=True, slots=True)
class RuneKind:
    """A single character."""

    def apply(self, el: Element, name: str, value: str) -> Element:
        return el.rune_attr(name, value)


@dataclass(frozen=True, slots=True)
class IntKind:
    def apply(self, el: Element, name: str, value: int) -> Element:
        return el.int_attr(name, value)


@dataclass(frozen=True, slots=True)
class NumberKind:
    """A floating-point number."""

    def apply(self, el: Element, name: str, value: float) -> Element:
        return el.float_attr(name, value)


@dataclass(frozen=True, slots=True)
class StringKind:
    def apply(self, el: Element, name: str, value: str) -> Element:
        return el.attr(name, value)


@dataclass(frozen=True, slots=True)
class DelimitedKind:
    """A list of values joined by ``delimiter``.

    A string value is split on the delimiter; any other iterable is added
    item by item.
    """

    delimiter: str

    @classmethod
    def space_delimited(cls) -> DelimitedKind:
        return cls(SPACE)

    @classmethod
    def comma_delimited(cls) -> DelimitedKind:
        return cls(COMMA)

    def apply(self, el: Element, name: str, value: str | Iterable[Any]) -> Element:
        seq = el.delimited(name, self.delimiter)
        if isinstance(value, str):
            seq.extend_split(value)
        else:
            seq.add(*value)
        return el


@dataclass(frozen=True, slots=True)
class KeyValueKind:
    """``key<pair_delimiter>value`` entries joined by ``entry_delimiter``.

    A string value is parsed; a mapping is added in sorted key order.
    """

    pair_delimiter: str
    entry_delimiter: str

    @classmethod
    def colon_semicolon(cls) -> KeyValueKind:
        return cls(COLON, SEMICOLON)

    def apply(self, el: Element, name: str, value: str | Mapping[str, str]) -> Element:
        opts = {"pair_delimiter": self.pair_delimiter, "entry_delimiter": self.entry_delimiter}
        if isinstance(value, str):
            return el.key_value_parse(name, value, **opts)
        return el.key_value_map(name, value, **opts)


@dataclass(frozen=True, slots=True)
class Choice:
    """One permitted value of an enumerated attribute.

    ``name`` is emitted verbatim; the empty name renders a bare attribute.
    """

    name: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class ChoicesKind:
    """A closed set of permitted values."""

    choices: tuple[Choice, ...]

    @classmethod
    def of(cls, *choices: Choice) -> ChoicesKind:
        return cls(tuple(choices))

    def names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.choices)

    def apply(self, el: Element, name: str, value: Choice | str) -> Element:
        """Set the attribute to one of the permitted choices.

        Raises:
            BuilderError: value is not in the set
        """
        chosen = value.name if isinstance(value, Choice) else value
        if chosen not in self.names():
            raise BuilderError(f"{chosen!r} is not one of {list(self.names())}", name)
        return el.choice_attr(name, chosen)


AttributeKind = (
    BoolKind | RuneKind | IntKind | NumberKind | StringKind | DelimitedKind | KeyValueKind | ChoicesKind
)


def choice_suffix(choice_name: str, choices: Iterable[Choice]) -> str:
    """Return the token a generator turns into a choice identifier.

    The empty choice becomes ``"Empty"``. A single-character choice that
    differs only by case from another choice in the set gets an ``_upper_``
    or ``_lower_`` prefix, so ``type="a"`` and ``type="A"`` stay distinct.

    Examples:
        >>> abc = [Choice("a"), Choice("A"), Choice("1")]
        >>> choice_suffix("a", abc), choice_suffix("A", abc), choice_suffix("1", abc)
        ('_lower_a', '_upper_A', '1')
    """
    if not choice_name:
        return "Empty"

    if len(choice_name) == 1:
        for choice in choices:
            if choice.name != choice_name and choice.name.casefold() == choice_name.casefold():
                prefix = "_upper_" if choice_name.isupper() else "_lower_"
                return prefix + choice_name

    return choice_name

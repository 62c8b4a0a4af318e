"""StringBuilder for O(n) string accumulation.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation.

A StringBuilder doubles as an in-memory render sink (it has ``write``),
and as the scratch buffer composite attribute values are rendered into
before they are merged with the scalar attributes of an element.

Thread Safety:
StringBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.
    
    Appends to a list, joins once at the end.
    O(n) total vs O(n²) for repeated string concatenation.
    
    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("<h1>")
            >>> sb.write("Hello")
            >>> sb.append("</h1>")
            >>> sb.build()
            '<h1>Hello</h1>'
    
    Thread Safety:
        Instance is local to each render() call.
        No shared mutable state.
        
    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def write(self, s: str) -> int:
        """Sink interface: append ``s`` and report the characters written."""
        if s:
            self._parts.append(s)
        return len(s)

    def build(self) -> str:
        """Join all parts into final string.

        Returns:
            Concatenated string of all appended parts
        """
        return "".join(self._parts)


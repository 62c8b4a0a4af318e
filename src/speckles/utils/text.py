"""Text processing utilities for Speckles.

Example:
    >>> from speckles.utils.text import escape_html
    >>> escape_html('<a href="x">')
    '&lt;a href=&#34;x&#34;&gt;'
"""

from __future__ import annotations

import html as html_module


def escape_html(text: str) -> str:
    """Escape HTML special characters.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &#34;
    - ' becomes &#39;

    Numeric references are used for both quote characters so the output is
    byte-identical to other html.EscapeString-style implementations.

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text

    Examples:
        >>> escape_html("<script>alert('xss')</script>")
        '&lt;script&gt;alert(&#39;xss&#39;)&lt;/script&gt;'
    """
    if not text:
        return ""

    escaped = html_module.escape(text, quote=True)
    return escaped.replace("&quot;", "&#34;").replace("&#x27;", "&#39;")

"""Exception classes for Speckles.

Provides standardized exceptions for error handling throughout Speckles.
"""

from __future__ import annotations


class SpecklesError(Exception):
    """Base exception for all Speckles errors.
    
    Subclass this for specific error categories.
    """

    pass


class BuilderError(SpecklesError, ValueError):
    """Error while constructing an element tree.
    
    Raised immediately by the fluent builder when it is misused, e.g.
    an odd number of flat key/value arguments or an empty attribute key.
    Never deferred to render time.
    """

    def __init__(self, message: str, attribute: str | None = None) -> None:
        """Initialize builder error.
        
        Args:
            message: Description of the misuse
            attribute: Attribute name involved (optional)
        """
        self.message = message
        self.attribute = attribute

        prefix = f"Attribute '{attribute}': " if attribute else ""
        super().__init__(f"{prefix}{message}")


class RenderError(SpecklesError):
    """Error during rendering.
    
    Base class for every failure raised while a tree is written out.
    """

    pass


class SinkError(RenderError):
    """The output sink rejected a write.
    
    The original exception is available as ``__cause__``.
    """

    def __init__(self, tag: str | None = None) -> None:
        """Initialize sink error.
        
        Args:
            tag: Tag of the element being written when the sink failed
        """
        self.tag = tag
        where = f" while rendering <{tag}>" if tag else ""
        super().__init__(f"failed to write to sink{where}")


class GroupRenderError(RenderError):
    """A child of a group failed to render.
    
    Wraps the child's exception (``__cause__``) to mark that it
    originated inside a grouped render.
    """

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"failed to render grouped child {index}")

"""
Exceptions raised while converting a document package.

All of them are terminal for the current conversion; the batch layer
catches them per file and reports the failure.
"""


class DocxConversionError(Exception):
    """Base exception for all conversion errors."""

    def __init__(self, message: str, part: str | None = None, identifier: str | None = None):
        super().__init__(message)
        self.part = part
        self.identifier = identifier

    def __str__(self) -> str:
        if self.part:
            return f"[{self.part}] {super().__str__()}"
        return super().__str__()


class MissingPartError(DocxConversionError):
    """A required entry of the package (document body, relationships) is absent."""

    def __init__(self, part: str):
        super().__init__(f"Required package part not found: {part}", part=part)


class MissingAttributeError(DocxConversionError):
    """A relation or reference element lacks an attribute it must carry."""

    def __init__(self, element_name: str, attribute: str, part: str | None = None):
        super().__init__(f"<{element_name}> has no '{attribute}' attribute", part=part)
        self.element_name = element_name
        self.attribute = attribute


class MissingReferenceError(DocxConversionError):
    """An embedded image points to a relationship id that cannot be resolved."""

    def __init__(self, identifier: str | None, message: str | None = None):
        super().__init__(
            message or f"Relationship id '{identifier}' has no target",
            identifier=identifier,
        )

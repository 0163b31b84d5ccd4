"""Exceptions raised while turning a ClaML document into a code tree.

Parsing is all-or-nothing: any of these aborts the whole parse.
"""


class ClaMLError(Exception):
    """Base exception for ClaML parsing errors."""

    pass


class SchemaViolationError(ClaMLError):
    """A required element or attribute is missing or malformed."""

    pass


class ClaMLSyntaxError(SchemaViolationError):
    """The source is not well-formed XML."""

    pass


class DuplicateCodeError(SchemaViolationError):
    """Two nodes share the same code identifier."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Duplicate code identifier: {code!r}")


class UnresolvedChildReferenceError(ClaMLError):
    """A SubClass reference names a code that cannot be resolved."""

    def __init__(self, code: str, reference: str, message: str | None = None):
        self.code = code
        self.reference = reference
        super().__init__(
            message
            or f"Code {code!r} references unknown child code {reference!r}"
        )


class CircularReferenceError(UnresolvedChildReferenceError):
    """A SubClass reference leads back to one of its own ancestors."""

    def __init__(self, code: str, reference: str, path: list[str]):
        self.path = path
        chain = " -> ".join([*path, reference])
        super().__init__(code, reference, f"Circular child reference: {chain}")


class UnknownModifierReferenceError(ClaMLError):
    """A ModifiedBy attachment names an unregistered modifier or submodifier."""

    def __init__(self, code: str, modifier: str, sub_modifier: str | None = None):
        self.code = code
        self.modifier = modifier
        self.sub_modifier = sub_modifier
        if sub_modifier is None:
            message = f"Code {code!r} references unknown modifier {modifier!r}"
        else:
            message = (
                f"Code {code!r} allows submodifier {sub_modifier!r} "
                f"which modifier {modifier!r} does not define"
            )
        super().__init__(message)

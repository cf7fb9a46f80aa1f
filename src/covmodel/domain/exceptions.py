"""Domain exceptions: all public errors of covmodel.

All exceptions visible to users are defined in the domain layer.
Application services raise these, they do not define their own.
"""


class CovModelError(Exception):
    """Base for all covmodel error exceptions.

    Allows: except CovModelError to catch all library errors.
    """


class MissingAttributeError(CovModelError, KeyError):
    """Report record lacks a required attribute.

    Inherits KeyError for semantic correctness (lookup by attribute name).

    Attributes:
        record: Tag of the record (Assembly, Type, Method, Statement, File).
        attribute: Name of the missing attribute.
    """

    def __init__(self, record: str, attribute: str) -> None:
        """Initialize with record tag and attribute name."""
        self.record = record
        self.attribute = attribute
        super().__init__(f"{record} record is missing required attribute {attribute!r}")

    def __str__(self) -> str:
        """Plain message (KeyError would quote it)."""
        return str(self.args[0])


class MalformedRecordError(CovModelError, ValueError):
    """Report record carries an unusable attribute value.

    Attributes:
        record: Tag of the record.
        attribute: Attribute holding the bad value.
        value: Raw attribute text.
        reason: Why the value is rejected.
    """

    def __init__(self, record: str, attribute: str, value: str, reason: str) -> None:
        """Initialize with record, attribute, raw value and reason."""
        self.record = record
        self.attribute = attribute
        self.value = value
        self.reason = reason
        super().__init__(f"{record}.{attribute}={value!r}: {reason}")


class MalformedNumberError(MalformedRecordError):
    """Line number attribute is not a positive integer."""

    def __init__(self, record: str, attribute: str, value: str) -> None:
        """Initialize with record, attribute and raw value."""
        super().__init__(record, attribute, value, "expected a positive integer")


class UnresolvedFileError(CovModelError, LookupError):
    """Statement references a file id absent from the file table.

    Attributes:
        file_id: Unknown file id.
    """

    def __init__(self, file_id: str) -> None:
        """Initialize with unknown file id."""
        self.file_id = file_id
        super().__init__(f"file id {file_id!r} not found in report file table")


class DuplicateNameError(CovModelError, ValueError):
    """Entity inserted twice under the same name.

    Raised when a class is added twice to one assembly,
    or an assembly twice to one model.

    Attributes:
        kind: Entity kind ("class" or "assembly").
        name: Duplicated name.
    """

    def __init__(self, kind: str, name: str) -> None:
        """Initialize with entity kind and name."""
        self.kind = kind
        self.name = name
        super().__init__(f"duplicate {kind} {name!r}")

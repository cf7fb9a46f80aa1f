"""Report index: flat lookup tables over a parsed dotCover report.

Built once, read-only afterwards, shared by all build tasks.
No filtering happens here.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

import structlog

from covmodel.domain.exceptions import MissingAttributeError, UnresolvedFileError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from xml.etree.ElementTree import Element, ElementTree

log = structlog.get_logger()

ASSEMBLY_TAG = "Assembly"
FILE_TAG = "File"


def attribute(element: Element, name: str) -> str:
    """Required attribute value of a report record.

    Raises:
        MissingAttributeError: Attribute absent.
    """
    value = element.get(name)
    if value is None:
        raise MissingAttributeError(element.tag, name)
    return value


class ReportIndex:
    """Module records and file table of one report.

    Attributes:
        modules: Every Assembly record, document order
        files: File id → file path
    """

    __slots__ = ("_by_name", "files", "modules")

    def __init__(self, report: Element | ElementTree) -> None:
        """Index report.

        Args:
            report: Parsed report (root element or whole tree).

        Raises:
            TypeError: report is None.
            MissingAttributeError: Assembly or File record without Name/Index.
        """
        if report is None:
            raise TypeError("report must not be None")

        self.modules: tuple[Element, ...] = tuple(report.iter(ASSEMBLY_TAG))

        by_name: dict[str, list[Element]] = {}
        for module in self.modules:
            by_name.setdefault(attribute(module, "Name"), []).append(module)
        self._by_name = {name: tuple(records) for name, records in by_name.items()}

        files: dict[str, str] = {}
        for record in report.iter(FILE_TAG):
            files[attribute(record, "Index")] = attribute(record, "Name")
        self.files: Mapping[str, str] = MappingProxyType(files)

        log.debug("report.indexed", modules=len(self.modules), files=len(files))

    def assembly_names(self) -> tuple[str, ...]:
        """Distinct module names, sorted."""
        return tuple(sorted(self._by_name))

    def modules_named(self, name: str) -> tuple[Element, ...]:
        """Module records with given name. Empty if none."""
        return self._by_name.get(name, ())

    def resolve_file(self, file_id: str) -> str:
        """File path for file id.

        Raises:
            UnresolvedFileError: file id not in file table.
        """
        try:
            return self.files[file_id]
        except KeyError:
            raise UnresolvedFileError(file_id) from None

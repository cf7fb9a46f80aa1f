"""Model builder: report records → Assembly → Class → CodeFile hierarchy.

Two-level fan-out: one task per assembly, and inside each assembly
one task per class. Tasks share the read-only ReportIndex and only
mutate through the lock-guarded Assembly.add_class and
CoverageModel.add_assembly.
FAIL-FIRST: the first failing task aborts the whole build.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, TypeAlias, TypeVar

import structlog

from covmodel.application.services.line_coverage import resolve_line_coverage
from covmodel.application.services.names import is_synthetic_type, normalize_method_name
from covmodel.application.services.report_index import ReportIndex, attribute
from covmodel.domain.configuration import BuildConfig
from covmodel.domain.coverage import (
    Assembly,
    Class,
    CodeElement,
    CodeFile,
    CoverageModel,
    Statement,
)
from covmodel.domain.exceptions import MalformedNumberError, MalformedRecordError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence
    from xml.etree.ElementTree import Element, ElementTree

log = structlog.get_logger()

NAMESPACE_TAG = "Namespace"
TYPE_TAG = "Type"
METHOD_TAG = "Method"
STATEMENT_TAG = "Statement"

# (declaring element, method element)
MethodRecord: TypeAlias = "tuple[Element, Element]"

T = TypeVar("T")


def build_coverage_model(
    report: Element | ElementTree,
    config: BuildConfig | None = None,
) -> CoverageModel:
    """Build coverage model from parsed report.

    Args:
        report: Parsed dotCover report (root element or whole tree).
        config: Build configuration. Uses defaults if None.

    Returns:
        CoverageModel with one Assembly per distinct module name.

    Raises:
        TypeError: report is None.
        CovModelError: Malformed or inconsistent report.
    """
    config = config or BuildConfig()
    index = ReportIndex(report)
    model = CoverageModel()

    names = [name for name in index.assembly_names() if config.accepts_assembly(name)]
    _run_all(
        config,
        names,
        lambda name: model.add_assembly(build_assembly(index, name, config)),
        thread_name_prefix="covmodel-assembly",
    )

    log.info(
        "model.built",
        assemblies=len(model.assemblies),
        classes=sum(len(assembly.classes) for assembly in model.assemblies),
    )
    return model


def build_assembly(
    index: ReportIndex,
    assembly_name: str,
    config: BuildConfig | None = None,
) -> Assembly:
    """Build one assembly with all its visible classes.

    Class names are deduplicated and sorted before building,
    so each class is built exactly once.
    """
    config = config or BuildConfig()
    log.debug("assembly.processing", assembly=assembly_name)

    records = class_records(index, assembly_name)
    names = sorted(name for name in records if config.accepts_class(name))
    assembly = Assembly(assembly_name)

    _run_all(
        config,
        names,
        lambda name: assembly.add_class(_build_class(index, assembly, name, records[name])),
        thread_name_prefix="covmodel-class",
    )
    return assembly


def build_class(index: ReportIndex, assembly: Assembly, class_name: str) -> Class:
    """Build one class of an assembly.

    The class is NOT inserted into the assembly; caller decides.
    A name without records yields a Class with no files.
    """
    records = class_records(index, assembly.name).get(class_name, ())
    return _build_class(index, assembly, class_name, records)


def build_file(index: ReportIndex, file_id: str, methods: Sequence[MethodRecord]) -> CodeFile:
    """Build the CodeFile of one file id from the methods of one class.

    Args:
        index: Report index for path resolution.
        file_id: FileIndex of the file.
        methods: All method records of the class, document order.

    Raises:
        UnresolvedFileError: file_id not in file table.
        MalformedNumberError: Non-integer line number.
    """
    statements = sorted(
        (
            parse_statement(element)
            for _, method in methods
            for element in method.iterfind(STATEMENT_TAG)
            if attribute(element, "FileIndex") == file_id
        ),
        key=lambda statement: statement.end_line,
    )
    lines = resolve_line_coverage(statements)
    path = index.resolve_file(file_id)

    return CodeFile(
        path=path,
        coverage=tuple(lines.coverage),
        line_visit_status=tuple(lines.line_visit_status),
        code_elements=_code_elements(file_id, methods),
    )


def class_records(index: ReportIndex, assembly_name: str) -> dict[str, list[Element]]:
    """Type records of an assembly grouped by qualified class name.

    Namespace/Type → "<Namespace>.<Type>", direct Type → "<Assembly>.<Type>".
    Compiler-generated types are skipped. A name may map to several
    records (same class listed in several modules or namespaces).
    """
    records: dict[str, list[Element]] = {}

    modules = index.modules_named(assembly_name)
    for module in modules:
        for namespace in module.iterfind(NAMESPACE_TAG):
            _add_types(records, attribute(namespace, "Name"), namespace)
    for module in modules:
        _add_types(records, attribute(module, "Name"), module)

    return records


def parse_statement(element: Element) -> Statement:
    """Convert Statement record to Statement value object.

    Raises:
        MissingAttributeError: Required attribute absent.
        MalformedNumberError: Line/EndLine not a positive integer.
        MalformedRecordError: Covered not True/False.
    """
    return Statement(
        start_line=_parse_line(element, "Line"),
        end_line=_parse_line(element, "EndLine"),
        file_id=attribute(element, "FileIndex"),
        visited=_parse_visited(element),
    )


def _add_types(records: dict[str, list[Element]], prefix: str, parent: Element) -> None:
    for type_element in parent.iterfind(TYPE_TAG):
        type_name = attribute(type_element, "Name")
        if is_synthetic_type(type_name):
            continue
        records.setdefault(f"{prefix}.{type_name}", []).append(type_element)


def _build_class(
    index: ReportIndex,
    assembly: Assembly,
    class_name: str,
    records: Sequence[Element],
) -> Class:
    methods = tuple(method for record in records for method in _iter_methods(record))

    file_ids = dict.fromkeys(
        attribute(statement, "FileIndex")
        for record in records
        for statement in record.iter(STATEMENT_TAG)
    )
    files = tuple(build_file(index, file_id, methods) for file_id in file_ids)

    log.debug("class.built", assembly=assembly.name, klass=class_name, files=len(files))
    return Class(name=class_name, assembly=assembly, files=files)


def _iter_methods(parent: Element) -> Iterator[MethodRecord]:
    """All Method records below parent at any depth, document order."""
    for child in parent:
        if child.tag == METHOD_TAG:
            yield parent, child
        yield from _iter_methods(child)


def _code_elements(file_id: str, methods: Sequence[MethodRecord]) -> tuple[CodeElement, ...]:
    """Code elements whose first statement lies in file_id."""
    elements: list[CodeElement] = []

    for declaring, method in methods:
        normalized = normalize_method_name(attribute(declaring, "Name"), attribute(method, "Name"))
        if normalized is None:
            continue

        first = method.find(STATEMENT_TAG)
        if first is None or attribute(first, "FileIndex") != file_id:
            continue

        elements.append(CodeElement(normalized.name, normalized.kind, _parse_line(first, "Line")))

    return tuple(elements)


def _parse_line(element: Element, name: str) -> int:
    raw = attribute(element, name)
    text = raw.strip()
    if not (text.isascii() and text.isdigit()) or int(text) == 0:
        raise MalformedNumberError(element.tag, name, raw)
    return int(text)


def _parse_visited(element: Element) -> bool:
    raw = attribute(element, "Covered")
    match raw.strip().lower():
        case "true":
            return True
        case "false":
            return False
        case _:
            raise MalformedRecordError(element.tag, "Covered", raw, "expected True or False")


def _run_all(
    config: BuildConfig,
    items: Sequence[T],
    task: Callable[[T], None],
    *,
    thread_name_prefix: str,
) -> None:
    """Run task for every item, on worker threads if configured.

    Re-raises the first failure after cancelling tasks not yet started.
    """
    if not config.parallel or len(items) <= 1:
        for item in items:
            task(item)
        return

    with ThreadPoolExecutor(
        max_workers=config.max_workers,
        thread_name_prefix=thread_name_prefix,
    ) as pool:
        futures = [pool.submit(task, item) for item in items]
        try:
            for future in as_completed(futures):
                future.result()
        except BaseException:
            pool.shutdown(cancel_futures=True)
            raise


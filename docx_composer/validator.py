"""
Build-time document validation.

Checks the cross-reference invariants the package format depends on
(numbering references, comment and bookmark pairing, vertical merges, custom
item payloads) and computes which optional parts the package will contain.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from lxml import etree as lxml_etree

from .exceptions import ValidationError
from .models.bookmark import BookmarkEnd, BookmarkStart
from .models.comment import CommentEnd, CommentRangeStart
from .models.document import Document, iter_paragraphs
from .models.paragraph import Paragraph
from .models.table import Table, TableCell
from .utils.xml_utils import make_parser
from .utils.enums import VMergeType

logger = logging.getLogger(__name__)


class ValidationLevel(Enum):
    """Validation levels."""
    ERROR = "error"
    WARNING = "warning"


class ValidationIssue:
    """Represents a validation issue."""

    def __init__(self, level: ValidationLevel, message: str, element_type: Optional[str] = None,
                 element_id: Optional[Any] = None):
        self.level = level
        self.message = message
        self.element_type = element_type
        self.element_id = element_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "message": self.message,
            "element_type": self.element_type,
            "element_id": self.element_id,
        }

    def __str__(self) -> str:
        return f"[{self.level.value.upper()}] {self.message}"


@dataclass(frozen=True)
class FeatureFlags:
    """Which optional parts a build emits."""

    numbering: bool = False
    comments: bool = False
    custom_properties: bool = False
    taskpanes: bool = False
    custom_items: bool = False


class DocumentValidator:
    """
    Validates a Document before serialization.

    ``validate()`` collects issues; ``check()`` raises ``ValidationError``
    listing every error found and returns the feature flags otherwise.
    """

    def __init__(self, document: Document):
        self.document = document
        self.issues: List[ValidationIssue] = []

    def validate(self) -> List[ValidationIssue]:
        self.issues = []
        self._validate_numbering()
        self._validate_comments()
        self._validate_bookmarks()
        self._validate_tables()
        self._validate_custom_items()
        self._validate_extensions()
        return self.issues

    def check(self) -> FeatureFlags:
        self.validate()
        for warning in self.get_warnings():
            logger.warning(warning.message)
        errors = self.get_errors()
        if errors:
            details = "; ".join(issue.message for issue in errors)
            raise ValidationError(f"Document has {len(errors)} invalid reference(s)", details)
        return self.features()

    def features(self) -> FeatureFlags:
        document = self.document
        uses_numbering = bool(document.abstract_numberings or document.numberings) or any(
            paragraph.property.numbering is not None for paragraph in self._all_paragraphs()
        )
        return FeatureFlags(
            numbering=uses_numbering,
            comments=bool(document.comments()),
            custom_properties=bool(document.doc_props.custom_properties),
            taskpanes=document.taskpanes or bool(document.web_extensions),
            custom_items=bool(document.custom_items),
        )

    def get_errors(self) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.level == ValidationLevel.ERROR]

    def get_warnings(self) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.level == ValidationLevel.WARNING]

    def has_errors(self) -> bool:
        return bool(self.get_errors())

    def _add_error(self, message: str, element_type: str, element_id: Any = None) -> None:
        self.issues.append(ValidationIssue(ValidationLevel.ERROR, message, element_type, element_id))

    def _add_warning(self, message: str, element_type: str, element_id: Any = None) -> None:
        self.issues.append(ValidationIssue(ValidationLevel.WARNING, message, element_type, element_id))

    def _all_paragraphs(self) -> Iterable[Paragraph]:
        yield from self.document.iter_paragraphs()
        for comment in self.document.comments():
            yield from iter_paragraphs(comment.children)

    def _validate_numbering(self) -> None:
        abstract_ids = {abstract.id for abstract in self.document.abstract_numberings}
        numbering_ids = set()
        for numbering in self.document.numberings:
            numbering_ids.add(numbering.id)
            if numbering.abstract_num_id not in abstract_ids:
                self._add_error(
                    f"Numbering {numbering.id} references undefined abstract numbering "
                    f"{numbering.abstract_num_id}",
                    "numbering", numbering.id,
                )

        for paragraph in self._all_paragraphs():
            reference = paragraph.property.numbering
            if reference is None or reference.id is None or reference.id == 0:
                continue
            if reference.id not in numbering_ids:
                self._add_error(f"Paragraph references undefined numbering {reference.id}", "paragraph", reference.id)

    def _validate_comments(self) -> None:
        started: Dict[int, int] = {}
        ended: Dict[int, int] = {}
        for paragraph in self.document.iter_paragraphs():
            for child in paragraph.children:
                if isinstance(child, CommentRangeStart):
                    if child.id in started:
                        self._add_error(f"Two comments share id {child.id}", "comment", child.id)
                    started[child.id] = started.get(child.id, 0) + 1
                elif isinstance(child, CommentEnd):
                    if child.id not in started:
                        self._add_error(f"Comment end {child.id} has no earlier comment start", "comment", child.id)
                    ended[child.id] = ended.get(child.id, 0) + 1

        for comment_id in started:
            count = ended.get(comment_id, 0)
            if count == 0:
                self._add_error(f"Comment {comment_id} is never closed", "comment", comment_id)
            elif count > 1:
                self._add_error(f"Comment {comment_id} is closed {count} times", "comment", comment_id)

    def _bookmark_markers(self) -> Iterable[Any]:
        for child in self.document.children:
            if isinstance(child, (BookmarkStart, BookmarkEnd)):
                yield child
            elif isinstance(child, (Paragraph, Table)):
                for paragraph in iter_paragraphs([child]):
                    for inline in paragraph.children:
                        if isinstance(inline, (BookmarkStart, BookmarkEnd)):
                            yield inline

    def _validate_bookmarks(self) -> None:
        starts: Dict[int, int] = {}
        ends: Dict[int, int] = {}
        for marker in self._bookmark_markers():
            target = starts if isinstance(marker, BookmarkStart) else ends
            target[marker.id] = target.get(marker.id, 0) + 1

        for bookmark_id, count in starts.items():
            if count > 1:
                self._add_error(f"Bookmark id {bookmark_id} is started {count} times", "bookmark", bookmark_id)
            end_count = ends.get(bookmark_id, 0)
            if end_count != 1:
                self._add_error(
                    f"Bookmark {bookmark_id} has {end_count} end marker(s), expected exactly one",
                    "bookmark", bookmark_id,
                )
        for bookmark_id in ends:
            if bookmark_id not in starts:
                self._add_error(f"Bookmark end {bookmark_id} has no start", "bookmark", bookmark_id)

    def _validate_tables(self) -> None:
        for table in self.document.iter_tables():
            self._validate_vertical_merges(table)
            if table.grid and len(table.grid) != table.column_count():
                self._add_warning(
                    f"Table grid has {len(table.grid)} column(s) but rows occupy {table.column_count()}; "
                    f"grid will be adjusted",
                    "table",
                )

    def _validate_vertical_merges(self, table: Table) -> None:
        previous: Dict[int, TableCell] = {}
        for row_index, row in enumerate(table.rows):
            current: Dict[int, TableCell] = {}
            column = row.grid_before
            for cell in row.cells:
                for offset in range(cell.grid_span):
                    current[column + offset] = cell
                if cell.property.vertical_merge == VMergeType.CONTINUE:
                    above = previous.get(column)
                    if above is None or above.property.vertical_merge not in (VMergeType.RESTART, VMergeType.CONTINUE):
                        self._add_error(
                            f"Vertical merge continues at row {row_index}, column {column} "
                            f"without a merged cell above",
                            "table_cell",
                        )
                column += cell.grid_span
            previous = current

    def _validate_custom_items(self) -> None:
        for item in self.document.custom_items:
            try:
                lxml_etree.fromstring(item.xml.encode("utf-8"), parser=make_parser())
            except lxml_etree.XMLSyntaxError as e:
                self._add_error(f"Custom item {item.id} is not well-formed XML ({e})", "custom_item", item.id)

    def _validate_extensions(self) -> None:
        seen = set()
        for extension in self.document.web_extensions:
            if extension.id in seen:
                self._add_warning(f"Web extension id {extension.id} is used twice", "web_extension", extension.id)
            seen.add(extension.id)

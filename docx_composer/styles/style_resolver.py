"""
Property resolution for runs and paragraphs.

Effective values cascade through these layers, first non-empty value wins:

1. the explicit property on the node,
2. the node's own style and its ``based_on`` ancestors,
3. for runs, the run properties of the enclosing paragraph's style chain,
4. the document defaults,
5. the built-in format defaults.

Nothing is written back into the tree; every call returns a new property bag.
"""

import logging
from typing import Dict, List, Optional

from ..models.base import Properties
from ..models.paragraph import Paragraph, ParagraphProperty
from ..models.run import Run, RunProperty
from ..models.style import Style, Styles
from ..utils.enums import AlignmentType

logger = logging.getLogger(__name__)


def _run_format_defaults() -> RunProperty:
    defaults = RunProperty()
    defaults.size = 20
    defaults.bold = False
    defaults.italic = False
    defaults.vanish = False
    defaults.spacing = 0
    return defaults


def _paragraph_format_defaults() -> ParagraphProperty:
    defaults = ParagraphProperty()
    defaults.alignment = AlignmentType.LEFT
    defaults.keep_next = False
    defaults.keep_lines = False
    defaults.page_break_before = False
    defaults.widow_control = True
    return defaults


def merge_layers(layers: List[Optional[Properties]], result: Properties) -> Properties:
    """Fold ``layers`` (most specific first) onto ``result``."""
    for layer in reversed([layer for layer in layers if layer is not None]):
        result = layer.merge(result)
    return result


class PropertyResolver:
    """
    Resolves effective run and paragraph properties against a style sheet.

    Style chains are cached per style id for the lifetime of the resolver, so
    create a new resolver after mutating the styles.
    """

    def __init__(self, styles: Optional[Styles] = None):
        self.styles = styles or Styles()
        self._chain_cache: Dict[str, List[Style]] = {}

    def style_chain(self, style_id: Optional[str]) -> List[Style]:
        """Styles from ``style_id`` up through ``based_on``; cycles and missing ids end the chain."""
        if not style_id:
            return []
        if style_id in self._chain_cache:
            return self._chain_cache[style_id]

        chain: List[Style] = []
        seen = set()
        current = style_id
        while current:
            if current in seen:
                logger.debug(f"Style inheritance cycle at {current!r}, chain cut")
                break
            seen.add(current)
            style = self.styles.get(current)
            if style is None:
                logger.debug(f"Style {current!r} is not defined")
                break
            chain.append(style)
            current = style.based_on

        self._chain_cache[style_id] = chain
        return chain

    def resolve_run(self, run: Run, paragraph: Optional[Paragraph] = None) -> RunProperty:
        layers: List[Optional[RunProperty]] = [run.property]
        layers.extend(style.run_property for style in self.style_chain(run.property.style_id))
        if paragraph is not None:
            layers.extend(style.run_property for style in self.style_chain(paragraph.property.style_id))
        layers.append(self.styles.doc_defaults.run_property)

        resolved = merge_layers(layers, _run_format_defaults())
        resolved.style_id = run.property.style_id
        return resolved

    def resolve_paragraph(self, paragraph: Paragraph) -> ParagraphProperty:
        layers: List[Optional[ParagraphProperty]] = [paragraph.property]
        layers.extend(style.paragraph_property for style in self.style_chain(paragraph.property.style_id))
        layers.append(self.styles.doc_defaults.paragraph_property)

        resolved = merge_layers(layers, _paragraph_format_defaults())
        resolved.style_id = paragraph.property.style_id
        return resolved

"""Front-matter block location and header aggregation."""

from frontmatterpy.header.frontmatter import FrontMatterBlock, find_front_matter
from frontmatterpy.header.header import FrontMatterHeader, HeaderState
from frontmatterpy.header.options import DecoderErrorPolicy, HeaderOptions

__all__ = [
    "DecoderErrorPolicy",
    "FrontMatterBlock",
    "FrontMatterHeader",
    "HeaderOptions",
    "HeaderState",
    "find_front_matter",
]

"""Document-level pipeline entrypoints and result carriers."""

from frontmatterpy.pipeline.entrypoints import collect_header_diagnostics, run_header_diagnostics
from frontmatterpy.pipeline.results import HeaderRunResult

__all__ = [
    "HeaderRunResult",
    "collect_header_diagnostics",
    "run_header_diagnostics",
]

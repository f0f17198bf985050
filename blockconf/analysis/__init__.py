"""
Diagnostics over configuration read results.
"""

from .import_graph import build_import_graph, format_import_tree, import_depths, root_files

__all__ = [
    "build_import_graph",
    "format_import_tree",
    "import_depths",
    "root_files",
]

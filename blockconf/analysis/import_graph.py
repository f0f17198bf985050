"""Import-graph diagnostics over a configuration read result."""

import os

import networkx as nx

from blockconf.core.info import ConfigurationInfo


def build_import_graph(info: ConfigurationInfo) -> nx.DiGraph:
    """
    Build a directed graph of the files touched by a read.

    Every file in ``info.files_parsed`` is a node carrying its open position
    as the ``order`` attribute; every import is an edge from the importing
    file to the imported one.

    :param info: Result of a configuration read
    :type info: ConfigurationInfo
    :return: Import graph
    :rtype: nx.DiGraph
    """
    graph = nx.DiGraph()
    for position, path in enumerate(info.files_parsed):
        if path not in graph:
            graph.add_node(path, order=position)
    for importer, imported in info.imports:
        graph.add_edge(importer, imported)
    return graph


def root_files(info: ConfigurationInfo) -> list[str]:
    """
    Return the files no other file imports, in open order.

    :param info: Result of a configuration read
    :type info: ConfigurationInfo
    :return: Entry-point files
    :rtype: list[str]
    """
    graph = build_import_graph(info)
    roots = [node for node in graph.nodes if graph.in_degree(node) == 0]
    return sorted(roots, key=lambda node: graph.nodes[node].get("order", 0))


def import_depths(info: ConfigurationInfo) -> dict[str, int]:
    """
    Return how many imports separate each file from its nearest entry point.

    :param info: Result of a configuration read
    :type info: ConfigurationInfo
    :return: File path to import depth
    :rtype: dict[str, int]
    """
    graph = build_import_graph(info)
    depths: dict[str, int] = {}
    for root in root_files(info):
        for node, depth in nx.single_source_shortest_path_length(graph, root).items():
            if node not in depths or depth < depths[node]:
                depths[node] = depth
    return depths


def format_import_tree(info: ConfigurationInfo, relative_to: str | None = None) -> str:
    """
    Render the import graph as an indented tree, one file per line.

    A file imported by several files is listed under each of them.

    :param info: Result of a configuration read
    :type info: ConfigurationInfo
    :param relative_to: Directory used to shorten paths, absolute paths if None
    :type relative_to: str | None
    :return: Multi-line tree
    :rtype: str
    """
    graph = build_import_graph(info)

    def label(path: str) -> str:
        return os.path.relpath(path, relative_to) if relative_to else path

    lines: list[str] = []

    def walk(node: str, depth: int, ancestors: frozenset[str]) -> None:
        lines.append(f"{'  ' * depth}{label(node)}")
        for child in graph.successors(node):
            if child not in ancestors:
                walk(child, depth + 1, ancestors | {child})

    for root in root_files(info):
        walk(root, 0, frozenset({root}))
    return "\n".join(lines)

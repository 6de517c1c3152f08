# io/importers/poly_text.py
import logging
import math
from collections import Counter

from dijkstra_map.app.protocols import GraphImporter
from dijkstra_map.domain.entities.geography import Node, Way
from dijkstra_map.io.importers.parsed import GraphImportError, ParsedNetwork

logger = logging.getLogger(__name__)


class PolyTextImporter(GraphImporter):
    """
    Plain vertex/edge list:

        n
        id x y          (n lines, plane coordinates)
        m ...           (edge header, only the first token matters)
        _ from to       (0-based vertex indices)
        0               (terminator, ignored)

    Every edge line becomes a two-way way. A malformed vertex line is dropped and
    later vertices are renumbered; edges touching a dropped or missing vertex are
    skipped.
    """

    def parse(self, text: str) -> ParsedNetwork:
        lines = [ln.strip() for ln in text.splitlines()]
        lines = [ln for ln in lines if ln]
        if len(lines) < 2:
            raise GraphImportError("POLY file needs at least a vertex count and one vertex")
        try:
            n = int(lines[0].split()[0])
        except ValueError as exc:
            raise GraphImportError(f"Bad vertex count line: {lines[0]!r}") from exc
        if n < 0:
            raise GraphImportError(f"Negative vertex count: {n}")

        skipped: Counter = Counter()
        nodes: list[Node] = []
        remap: dict[int, int] = {}  # file index -> node index
        for file_idx, line in enumerate(lines[1 : 1 + n]):
            parts = line.split()
            try:
                node_id, x, y = parts[0], float(parts[1]), float(parts[2])
            except (IndexError, ValueError):
                skipped["vertex"] += 1
                continue
            if not (math.isfinite(x) and math.isfinite(y)):
                skipped["vertex"] += 1
                continue
            remap[file_idx] = len(nodes)
            nodes.append(Node(id=node_id, x=x, y=y, lat=y, lon=x))

        ways: list[Way] = []
        header_at = 1 + n
        if header_at < len(lines):
            header = lines[header_at].split()[0]
            edge_lines = lines[header_at + 1 : len(lines) - 1]
            for line in edge_lines:
                parts = line.split()
                try:
                    a, b = int(parts[1]), int(parts[2])
                except (IndexError, ValueError):
                    skipped["edge"] += 1
                    continue
                if a not in remap or b not in remap:
                    skipped["edge_ref"] += 1
                    continue
                ways.append(Way((remap[a], remap[b]), oneway=False))
            if header.isdigit() and int(header) != len(edge_lines):
                logger.debug("POLY header announces %s edges, found %d", header, len(edge_lines))

        if skipped:
            logger.info("POLY import skipped records: %s", dict(skipped))
        return ParsedNetwork(nodes=nodes, ways=ways, source="poly", skipped=skipped)

# io/importers/osm_xml.py
import logging
import math
import xml.etree.ElementTree as ET
from collections import Counter

from dijkstra_map.app.protocols import GraphImporter
from dijkstra_map.domain.entities.geography import Node, Way
from dijkstra_map.domain.graph.projection import EARTH_R, METERS_PER_UNIT, normalize, project
from dijkstra_map.io.importers.parsed import GraphImportError, ParsedNetwork

logger = logging.getLogger(__name__)


def _coord(el: ET.Element, attr: str) -> float:
    # a missing attribute reads as 0, like the exporters that omit it
    v = float(el.get(attr) or "0")
    if not math.isfinite(v):
        raise ValueError(f"{attr}={v}")
    return v


def _is_oneway(way_el: ET.Element) -> bool:
    return any(t.get("k") == "oneway" and t.get("v") == "yes" for t in way_el.iter("tag"))


class OsmXmlImporter(GraphImporter):
    def __init__(self, *, radius_m: float = EARTH_R, meters_per_unit: float = METERS_PER_UNIT):
        self.radius_m, self.meters_per_unit = radius_m, meters_per_unit

    def parse(self, text: str) -> ParsedNetwork:
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise GraphImportError(f"Could not parse OSM XML: {exc}") from exc

        skipped: Counter = Counter()
        ids: list[str] = []
        geo: list[tuple[float, float]] = []
        projected: list[tuple[float, float]] = []
        id_to_index: dict[str, int] = {}

        for el in root.iter("node"):
            node_id = el.get("id")
            if not node_id:
                skipped["node_without_id"] += 1
                continue
            try:
                lat, lon = _coord(el, "lat"), _coord(el, "lon")
                x, y = project(lat, lon, radius_m=self.radius_m)
            except (ValueError, OverflowError):
                skipped["node_bad_coords"] += 1
                continue
            if not (math.isfinite(x) and math.isfinite(y)):
                skipped["node_bad_coords"] += 1
                continue
            id_to_index[node_id] = len(ids)
            ids.append(node_id)
            geo.append((lat, lon))
            projected.append((x, y))

        xy = normalize(projected, meters_per_unit=self.meters_per_unit)
        nodes = [
            Node(id=i, x=x, y=y, lat=lat, lon=lon) for i, (x, y), (lat, lon) in zip(ids, xy, geo)
        ]

        ways: list[Way] = []
        for el in root.iter("way"):
            refs = []
            for nd in el.iter("nd"):
                idx = id_to_index.get(nd.get("ref", ""))
                if idx is None:
                    skipped["unknown_ref"] += 1
                    continue
                refs.append(idx)
            if len(refs) < 2:
                skipped["short_way"] += 1
                continue
            ways.append(Way(tuple(refs), oneway=_is_oneway(el)))

        if skipped:
            logger.info("OSM import skipped records: %s", dict(skipped))
        return ParsedNetwork(nodes=nodes, ways=ways, source="osm", skipped=skipped)

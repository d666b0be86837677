"""In-memory document holding named s-rep nodes together with their display properties."""
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List

from srepkit.io import srep_io
from srepkit.models.sreps.errors import InvalidArgument
from srepkit.models.sreps.interpolater import Interpolater
from srepkit.models.sreps.srep import EllipticalSRep

logger = logging.getLogger(__name__)


@dataclass
class SRepDisplay:
    visibility: bool = True
    opacity: float = 1.0

    def __post_init__(self):
        self.set_opacity(self.opacity)

    def set_opacity(self, opacity):
        if not 0.0 <= opacity <= 1.0:
            raise InvalidArgument("opacity must be within [0, 1], got %r" % (opacity,))
        self.opacity = float(opacity)


@dataclass
class SRepNode:
    id: str
    name: str
    srep: EllipticalSRep
    display: SRepDisplay = field(default_factory=SRepDisplay)


class SRepScene:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._nodes: Dict[str, SRepNode] = {}
        self._next_id = 1

    def _unique_name(self, name):
        base = name or "SRep"
        taken = {node.name for node in self._nodes.values()}
        if base not in taken:
            return base
        i = 1
        while "%s_%d" % (base, i) in taken:
            i += 1
        return "%s_%d" % (base, i)

    def add_srep(self, srep: EllipticalSRep, name: str = "") -> str:
        """Add srep under a unique name and return the id of the new node."""
        if not isinstance(srep, EllipticalSRep):
            raise InvalidArgument("Expected an EllipticalSRep, got %r" % type(srep).__name__)
        with self._lock:
            node_id = "SRepNode%d" % self._next_id
            self._next_id += 1
            self._nodes[node_id] = SRepNode(node_id, self._unique_name(name), srep)
            logger.debug("Added node %s (%s)", node_id, self._nodes[node_id].name)
            return node_id

    def get(self, node_id: str) -> SRepNode:
        with self._lock:
            if node_id not in self._nodes:
                raise KeyError("No s-rep node with id %r" % node_id)
            return self._nodes[node_id]

    def remove(self, node_id: str) -> None:
        with self._lock:
            self.get(node_id)
            del self._nodes[node_id]

    def nodes(self) -> List[SRepNode]:
        with self._lock:
            return list(self._nodes.values())

    def __len__(self):
        with self._lock:
            return len(self._nodes)

    def import_srep(self, header_file_name: str, name: str = "") -> str:
        srep = srep_io.read_srep(header_file_name)
        return self.add_srep(srep, name)

    def export_srep(self, node_id: str, directory: str, base_name: str) -> str:
        return srep_io.export_srep(self.get(node_id).srep, directory, base_name)

    def interpolate(self, node_id: str, interpolate_level: int, new_name: str = "") -> str:
        """Add an interpolated copy of a node and return its id; nothing is added if interpolation fails."""
        source = self.get(node_id)
        interp_srep = Interpolater(interpolate_level).interpolate(source.srep)
        return self.add_srep(interp_srep, new_name or source.name + "_interpolated")

    def interpolate_into(self, node_id: str, interpolate_level: int, destination_id: str) -> SRepNode:
        """Replace the s-rep of an existing node, keeping its id, name and display properties."""
        source = self.get(node_id)
        destination = self.get(destination_id)
        with self._lock:
            Interpolater(interpolate_level).interpolate_into(source.srep, destination.srep)
        return destination

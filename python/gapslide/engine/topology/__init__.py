from gapslide.engine.topology.coords import Topology, axis_distance

__all__ = ["Topology", "axis_distance"]

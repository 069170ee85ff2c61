from .circuit_validator import validate_circuit
from .connectivity import build_adjacency, find_active_components, find_connected_components

__all__ = ['validate_circuit', 'build_adjacency', 'find_active_components', 'find_connected_components']

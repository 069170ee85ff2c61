"""
simulation/circuit_validator.py

Advisory design validation with no Qt dependencies.
"""

from models.validation import EMPTY_CIRCUIT, NOT_CONNECTED, ValidationError


def validate_circuit(components, wires):
    """
    Check the design for empty content and floating components.

    Args:
        components: Dict[str, ComponentData] keyed by component ID
        wires: List[WireData]

    Returns:
        list[ValidationError], warnings only; validation never blocks edits
    """
    findings = []

    # 1. Nothing placed yet
    if not components:
        findings.append(ValidationError.warning(EMPTY_CIRCUIT))

    # 2. Components no wire point refers to
    connected = set()
    for wire in wires:
        connected.update(wire.get_component_ids())

    for comp in components.values():
        if comp.component_id not in connected:
            findings.append(
                ValidationError.warning(
                    NOT_CONNECTED.format(component_type=comp.component_type.value),
                    comp.component_id,
                )
            )

    return findings

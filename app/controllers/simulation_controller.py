"""
SimulationController - Runs design validation and the reachability check.

This module contains no Qt dependencies. "Simulation" here is graph
reachability only: it marks the components that share a wired closure
with both a voltage source and a ground.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from models.circuit import CircuitModel
from models.validation import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Result of a validation or simulation run."""

    success: bool
    findings: list[ValidationError] = field(default_factory=list)
    active_components: set[str] = field(default_factory=set)

    @property
    def errors(self) -> list[str]:
        return [f.message for f in self.findings if f.is_error]

    @property
    def warnings(self) -> list[str]:
        return [f.message for f in self.findings if not f.is_error]


class SimulationController:
    """
    Controller for validation and reachability runs.

    Results are pushed to the CircuitController (when one is attached) so
    the findings panel and the powered-state rendering stay current.
    """

    def __init__(self, model: Optional[CircuitModel] = None, circuit_ctrl=None):
        self.model = model or CircuitModel()
        self.circuit_ctrl = circuit_ctrl

    def validate_circuit(self) -> SimulationResult:
        """
        Check for an empty design and floating components.

        Findings are advisory; success is False only if an error is found.
        """
        from simulation import validate_circuit

        findings = validate_circuit(self.model.components, self.model.wires)
        result = SimulationResult(
            success=not any(f.is_error for f in findings),
            findings=findings,
        )
        logger.debug("Validation produced %d finding(s)", len(findings))

        if self.circuit_ctrl:
            self.circuit_ctrl.set_validation_results(findings)
        return result

    def simulate_circuit(self) -> SimulationResult:
        """
        Derive the active-component set.

        When the design lacks a source or a ground, the error finding is
        published and the previous active set is left as it was.
        """
        from simulation import find_active_components

        active, findings = find_active_components(self.model.components, self.model.wires)
        missing_prerequisite = any(f.is_error for f in findings)

        result = SimulationResult(
            success=not missing_prerequisite and bool(active),
            findings=findings,
            active_components=active,
        )
        logger.debug("Simulation: %d active component(s), %d finding(s)", len(active), len(findings))

        if self.circuit_ctrl:
            if missing_prerequisite:
                self.circuit_ctrl.set_validation_results(findings)
                result.active_components = set(self.circuit_ctrl.active_components)
            else:
                self.circuit_ctrl.set_validation_results(findings, active)
        return result

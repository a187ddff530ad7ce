"""
Xilinx vendor extensions.

Parameter abstraction definitions (``xilinx:parameterAbstractionDefinition``)
form a secondary catalog that supplies default values for the logical
parameters of a bus protocol, e.g. ``DATA_WIDTH`` of ``aximm``.
"""

from typing import Dict, List, Optional

from pydantic import Field

from .base import VLNV, StrictModel


class ParameterAbstraction(StrictModel):
    """Default and usage of one logical bus parameter."""

    logical_name: str
    format: str = ""
    default: str = ""
    provider: str = ""
    required: bool = False
    usage: str = ""
    permission: str = ""


class ParameterAbstractionDefinition(StrictModel):
    """Per-protocol catalog of parameter defaults."""

    vlnv: VLNV
    parameters: List[ParameterAbstraction] = Field(default_factory=list)

    def defaults(self) -> Dict[str, str]:
        """Logical name -> default value, in document order."""
        return {p.logical_name: p.default for p in self.parameters}

    def get_parameter(self, logical_name: str) -> Optional[ParameterAbstraction]:
        """Get parameter by logical name (case-insensitive)."""
        lowered = logical_name.lower()
        return next((p for p in self.parameters if p.logical_name.lower() == lowered), None)

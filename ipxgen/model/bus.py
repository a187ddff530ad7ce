"""
Bus definitions and component bus interfaces.
"""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import VLNV, LibraryRef, StrictModel


class BusDefinition(StrictModel):
    """
    Bus type definition.

    Describes connection rules for a bus (addressable, direct connection,
    master/slave limits). Ports live in the abstraction definitions that
    reference it.
    """

    vlnv: VLNV
    direct_connection: bool = Field(..., description="Master may connect directly to slave")
    addressable: bool = Field(..., description="Bus carries an address space")
    extends: List[LibraryRef] = Field(default_factory=list)
    max_masters: int = Field(default=-1, description="-1 when unbounded")
    max_slaves: int = Field(default=-1, description="-1 when unbounded")


class InterfaceMode(str, Enum):
    """Enumeration for bus interface modes."""

    MASTER = "master"
    SLAVE = "slave"
    SYSTEM = "system"
    MIRRORED_MASTER = "mirroredMaster"
    MIRRORED_SLAVE = "mirroredSlave"
    MIRRORED_SYSTEM = "mirroredSystem"
    MONITOR = "monitor"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["InterfaceMode"]:
        """Map a mode element name (any case) to a mode, or None."""
        lowered = tag.lower()
        return next((mode for mode in cls if mode.value.lower() == lowered), None)


class Vector(StrictModel):
    """Bit range of a mapped port."""

    left: Optional[int] = None
    right: Optional[int] = None


class PortMap(StrictModel):
    """Mapping of one logical abstraction port to a physical component port."""

    logical_name: str
    logical_range: Optional[Vector] = None
    physical_name: str
    physical_range: Optional[Vector] = None


class Parameter(StrictModel):
    """Bus interface parameter (name/value pair as written in the document)."""

    name: Optional[str] = None
    value: Optional[str] = None


class BusInterface(StrictModel):
    """
    Named attachment point on a component.

    Binds a bus type, an optional abstraction type and a mode.
    """

    name: str = Field(..., description="Interface name (e.g., 'M_AXI_HPM0_FPD')")
    display_name: Optional[str] = None
    description: Optional[str] = None
    bus_type: LibraryRef
    abstraction_type: Optional[LibraryRef] = None
    mode: InterfaceMode
    connection_required: bool = False
    port_maps: List[PortMap] = Field(default_factory=list)
    parameters: List[Parameter] = Field(default_factory=list)

    def get_port_map(self, logical_name: str) -> Optional[PortMap]:
        """Get port map by logical port name."""
        return next((pm for pm in self.port_maps if pm.logical_name == logical_name), None)

"""Components, component instances and designs."""

from typing import Dict, List, Optional

from pydantic import Field

from .base import VLNV, LibraryRef, StrictModel
from .bus import BusInterface


class Component(StrictModel):
    """
    Component definition.

    Only bus interfaces are modelled; memory maps, address spaces, file sets
    and the other IP-XACT collections carry no generation behaviour.
    """

    vlnv: VLNV
    bus_interfaces: List[BusInterface] = Field(default_factory=list)

    def get_bus_interface(self, name: str) -> Optional[BusInterface]:
        """Get bus interface by name."""
        return next((bus for bus in self.bus_interfaces if bus.name == name), None)


class ConfigurableElementValue(StrictModel):
    """Instance-specific override, keyed by a vendor reference id."""

    reference_id: str
    value: str


class ComponentInstance(StrictModel):
    """One placement of a component within a design."""

    instance_name: str
    component_ref: LibraryRef
    configurable_element_values: List[ConfigurableElementValue] = Field(default_factory=list)

    def config(self) -> Dict[str, str]:
        """Flat reference id -> value mapping, case preserved, last value wins."""
        return {cev.reference_id: cev.value for cev in self.configurable_element_values}


class Design(StrictModel):
    """Complete hardware configuration: a set of component instances."""

    vlnv: VLNV
    component_instances: List[ComponentInstance] = Field(default_factory=list)

    def get_instance(self, instance_name: str) -> Optional[ComponentInstance]:
        """Get component instance by name."""
        return next(
            (i for i in self.component_instances if i.instance_name == instance_name), None
        )

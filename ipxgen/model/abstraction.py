"""
Abstraction definitions: the logical port set of a bus protocol.
"""

from enum import Enum
from typing import TYPE_CHECKING, List, Mapping, Optional, Tuple

from pydantic import Field

from ipxgen.generator.base_generator import (
    AbstractionGenerator,
    GeneratedCode,
    get_template_environment,
)

from .base import VLNV, LibraryRef, StrictModel

if TYPE_CHECKING:
    from .registry import DefinitionRegistry


class Qualifier(str, Enum):
    """What a logical port carries."""

    ADDRESS = "address"
    DATA = "data"
    CLOCK = "clock"
    RESET = "reset"

    @classmethod
    def from_tag(cls, value: str) -> Optional["Qualifier"]:
        """Map ``isAddress``/``isData``/``isClock``/``isReset`` to a qualifier."""
        mapping = {
            "isaddress": cls.ADDRESS,
            "isdata": cls.DATA,
            "isclock": cls.CLOCK,
            "isreset": cls.RESET,
        }
        return mapping.get(value.strip().lower())


class PortStyle(str, Enum):
    WIRE = "wire"
    TRANSACTIONAL = "transactional"


class Presence(str, Enum):
    REQUIRED = "required"
    ILLEGAL = "illegal"
    OPTIONAL = "optional"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "Presence":
        """Unknown or missing presence is treated as optional."""
        if value is None:
            return cls.OPTIONAL
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OPTIONAL


class WirePortDirection(str, Enum):
    """Wire direction, named after the SpinalHDL direction helpers."""

    IN = "in"
    OUT = "out"
    INOUT = "inout"

    def flip(self) -> "WirePortDirection":
        """Swap in and out; inout is its own mirror."""
        if self is WirePortDirection.IN:
            return WirePortDirection.OUT
        if self is WirePortDirection.OUT:
            return WirePortDirection.IN
        return self


class WirePort(StrictModel):
    """Wire constraints on one side (master or slave) of a logical port."""

    presence: Presence = Field(default=Presence.OPTIONAL)
    width: Optional[int] = Field(default=None, description="Width in bits")
    direction: Optional[WirePortDirection] = Field(default=None)


class AbstractionPort(StrictModel):
    """A logical port of an abstraction definition."""

    logical_name: str = Field(..., description="Logical port name (e.g., 'AWADDR')")
    display_name: Optional[str] = None
    description: Optional[str] = None
    qualifier: Optional[Qualifier] = None
    style: PortStyle = Field(..., description="Wire or transactional port")
    on_master: Optional[WirePort] = None
    on_slave: Optional[WirePort] = None
    default_value: Optional[int] = None

    def as_master(self) -> Optional[Tuple[WirePortDirection, int]]:
        """
        Resolve direction and width from the master's point of view.

        The master-side constraints are preferred; otherwise the slave side
        is used with its direction flipped. Returns None unless both a
        direction and a width resolve.
        """
        direction = None
        if self.on_master is not None and self.on_master.direction is not None:
            direction = self.on_master.direction
        elif self.on_slave is not None and self.on_slave.direction is not None:
            direction = self.on_slave.direction.flip()

        width = None
        if self.on_master is not None and self.on_master.width is not None:
            width = self.on_master.width
        elif self.on_slave is not None and self.on_slave.width is not None:
            width = self.on_slave.width

        if direction is None or width is None:
            return None
        return direction, width


class AbstractionDefinition(StrictModel, AbstractionGenerator):
    """
    Schema-derived abstraction definition.

    Generic fallback generator for buses without a native implementation:
    declares a ``Bundle`` with one ``Bits`` field per resolvable port and
    instantiates it without consuming any configuration.
    """

    vlnv: VLNV
    bus_type: LibraryRef
    extends: List[LibraryRef] = Field(default_factory=list)
    ports: List[AbstractionPort] = Field(default_factory=list)

    @property
    def type_name(self) -> str:
        """Scala class name of the generated bundle."""
        return self.bus_type.name

    @property
    def master_ports(self) -> List[Tuple[AbstractionPort, WirePortDirection, int]]:
        """Ports with a resolved master view, in document order."""
        resolved = []
        for port in self.ports:
            view = port.as_master()
            if view is not None:
                resolved.append((port, view[0], view[1]))
        return resolved

    def get_port(self, logical_name: str) -> Optional[AbstractionPort]:
        """Get port by logical name."""
        return next((p for p in self.ports if p.logical_name == logical_name), None)

    def produce_instance(
        self, config: Mapping[str, str], registry: "DefinitionRegistry"
    ) -> Optional[GeneratedCode]:
        return f"{self.type_name}()", []

    def produce_type(
        self, indent: int, config: Mapping[str, str], registry: "DefinitionRegistry"
    ) -> Optional[GeneratedCode]:
        template = get_template_environment().get_template("bundle.scala.j2")
        declaration = template.render(
            name=self.type_name,
            tab=" " * indent,
            ports=[
                {"name": port.logical_name, "direction": direction.value, "width": width}
                for port, direction, width in self.master_ports
            ],
        )
        return declaration.rstrip("\n"), []

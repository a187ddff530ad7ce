"""
Pydantic-based data models for IP-XACT metadata.

Entities reference one another only by VLNV; the DefinitionRegistry owns
them and resolves references.
"""

from .base import VLNV, IpxactBaseModel, LibraryRef, StrictModel
from .abstraction import (
    AbstractionDefinition,
    AbstractionPort,
    PortStyle,
    Presence,
    Qualifier,
    WirePort,
    WirePortDirection,
)
from .bus import BusDefinition, BusInterface, InterfaceMode, Parameter, PortMap, Vector
from .component import Component, ComponentInstance, ConfigurableElementValue, Design
from .xilinx import ParameterAbstraction, ParameterAbstractionDefinition
from .registry import Definition, DefinitionRegistry, UnknownReferenceError

__all__ = [
    # Base
    "IpxactBaseModel",
    "StrictModel",
    "VLNV",
    "LibraryRef",
    # Abstraction
    "AbstractionDefinition",
    "AbstractionPort",
    "PortStyle",
    "Presence",
    "Qualifier",
    "WirePort",
    "WirePortDirection",
    # Bus
    "BusDefinition",
    "BusInterface",
    "InterfaceMode",
    "Parameter",
    "PortMap",
    "Vector",
    # Component / Design
    "Component",
    "ComponentInstance",
    "ConfigurableElementValue",
    "Design",
    # Xilinx
    "ParameterAbstraction",
    "ParameterAbstractionDefinition",
    # Registry
    "Definition",
    "DefinitionRegistry",
    "UnknownReferenceError",
]

"""
XML Parser for IP-XACT metadata.

Converts SPIRIT / Xilinx XML documents (bus definitions, abstraction
definitions, components, designs and parameter abstraction catalogs) into
the Pydantic models of ``ipxgen.model``.
"""

import logging
import re
from pathlib import Path
from typing import Callable, List, Optional, TypeVar, Union

from lxml import etree
from pydantic import ValidationError

from ipxgen.model import (
    VLNV,
    AbstractionDefinition,
    AbstractionPort,
    BusDefinition,
    BusInterface,
    Component,
    ComponentInstance,
    ConfigurableElementValue,
    Design,
    InterfaceMode,
    LibraryRef,
    Parameter,
    ParameterAbstraction,
    ParameterAbstractionDefinition,
    PortMap,
    PortStyle,
    Presence,
    Qualifier,
    Vector,
    WirePort,
    WirePortDirection,
)

from .errors import ParseError
from .tree import SPIRIT_PREFIX, XILINX_PREFIX, SchemaNode

logger = logging.getLogger(__name__)

T = TypeVar("T")

INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

Entity = Union[
    AbstractionDefinition,
    BusDefinition,
    Component,
    Design,
    ParameterAbstractionDefinition,
]


class IpxactXmlParser:
    """
    Parser for IP-XACT XML documents.

    Handles:
    - Namespace gate (documents must bind the ``spirit`` or ``xilinx`` prefix)
    - Dispatch on the root element to the matching entity parser
    - Conversion of syntax and validation errors to ParseError
    """

    def __init__(self):
        self._current_file: Optional[Path] = None

    def parse_file(self, file_path: Union[str, Path]) -> Optional[Entity]:
        """
        Parse an IP-XACT XML file.

        Args:
            file_path: Path to the XML document

        Returns:
            The parsed entity, or None for foreign XML and unmodelled roots

        Raises:
            ParseError: If the XML is malformed or a required field is missing
        """
        file_path = Path(file_path)
        self._current_file = file_path

        try:
            root = SchemaNode.from_file(file_path)
        except etree.XMLSyntaxError as e:
            raise ParseError(f"XML syntax error: {e}", file_path, e.lineno)
        except OSError as e:
            raise ParseError(f"Cannot read file: {e}", file_path)

        if not root.declares_any():
            logger.debug("Ignoring %s: no spirit/xilinx namespace", file_path)
            return None

        return self.parse(root)

    def parse_design(self, file_path: Union[str, Path]) -> Design:
        """
        Parse a design document (``.xci`` or design XML).

        Raises:
            ParseError: If the file cannot be parsed or is not a design
        """
        parsed = self.parse_file(file_path)
        if not isinstance(parsed, Design):
            found = type(parsed).__name__ if parsed is not None else "no metadata"
            raise ParseError(f"Expected a design document, found {found}", file_path)
        return parsed

    def parse(self, node: SchemaNode) -> Optional[Entity]:
        """Parse a document root into its entity; None for unmodelled roots."""
        parsers = {
            "abstractionDefinition": self._parse_abstraction_definition,
            "busDefinition": self._parse_bus_definition,
            "component": self._parse_component,
            "design": self._parse_design,
            "parameterAbstractionDefinition": self._parse_parameter_abstraction_definition,
        }
        entity_parser = parsers.get(node.label)
        if entity_parser is None:
            logger.debug("No parser for root element '%s'", node.label)
            return None

        try:
            return entity_parser(node)
        except ValidationError as e:
            errors = []
            for error in e.errors():
                loc = " -> ".join(str(x) for x in error["loc"])
                errors.append(f"{loc}: {error['msg']}")
            raise ParseError(
                f"Validation failed:\n  " + "\n  ".join(errors), self._current_file, node.line
            )

    # --- Primitive helpers ---

    def _error(self, message: str, node: SchemaNode) -> ParseError:
        return ParseError(message, self._current_file, node.line)

    def _parse_list(
        self, nodes: List[SchemaNode], what: str, parse_fn: Callable[[SchemaNode], T]
    ) -> List[T]:
        """Parse each node, naming the failing index in errors."""
        result = []
        for idx, node in enumerate(nodes):
            try:
                result.append(parse_fn(node))
            except ParseError as e:
                raise e.within(what, idx) from None
        return result

    def _required_child(self, node: SchemaNode, label: str) -> SchemaNode:
        child = node.child(label)
        if child is None:
            raise self._error(f"<{node.label}> missing required element <{label}>", node)
        return child

    def _required_text(self, node: SchemaNode, label: str) -> str:
        return self._required_child(node, label).text

    def _parse_bool(self, node: SchemaNode) -> bool:
        """Parse schema booleans: exactly 'true' or 'false'."""
        text = node.text
        if text == "true":
            return True
        if text == "false":
            return False
        raise self._error(f"<{node.label}> expected 'true' or 'false', got '{text}'", node)

    def _parse_int(self, node: SchemaNode) -> int:
        """Parse a plain decimal integer (ASCII digits, optional sign)."""
        text = node.text
        if not INTEGER_PATTERN.fullmatch(text):
            raise self._error(f"<{node.label}> expected an integer, got '{text}'", node)
        return int(text)

    def _optional_int(self, node: SchemaNode, label: str) -> Optional[int]:
        child = node.child(label)
        return self._parse_int(child) if child is not None else None

    def _parse_vlnv(self, node: SchemaNode) -> VLNV:
        """Parse the vendor/library/name/version children of a document root."""
        return VLNV(
            vendor=self._required_text(node, "vendor"),
            library=self._required_text(node, "library"),
            name=self._required_text(node, "name"),
            version=self._required_text(node, "version"),
        )

    def _parse_ref(self, node: SchemaNode) -> LibraryRef:
        """Parse a reference given as spirit:vendor/library/name/version attributes."""
        values = {}
        for field in ("vendor", "library", "name", "version"):
            value = node.attr(SPIRIT_PREFIX, field)
            if value is None:
                raise self._error(f"<{node.label}> missing attribute spirit:{field}", node)
            values[field] = value
        return LibraryRef(**values)

    # --- Abstraction definitions ---

    def _parse_abstraction_definition(self, node: SchemaNode) -> AbstractionDefinition:
        return AbstractionDefinition(
            vlnv=self._parse_vlnv(node),
            bus_type=self._parse_ref(self._required_child(node, "busType")),
            extends=[self._parse_ref(n) for n in node.children("extends")],
            ports=self._parse_list(
                node.path("ports", "port"), "port", self._parse_abstraction_port
            ),
        )

    def _parse_abstraction_port(self, node: SchemaNode) -> AbstractionPort:
        style_node = next(
            (c for c in node.children() if c.label in ("wire", "transactional")), None
        )
        if style_node is None:
            raise self._error(
                f"Port '{node.child_text('logicalName')}' has neither <wire> nor <transactional>",
                node,
            )

        # Wire constraints sit under <wire>; older exports put them on the port
        def wire_child(label: str) -> Optional[SchemaNode]:
            found = style_node.child(label)
            return found if found is not None else node.child(label)

        on_master = wire_child("onMaster")
        on_slave = wire_child("onSlave")
        default_value = wire_child("defaultValue")

        return AbstractionPort(
            logical_name=self._required_text(node, "logicalName"),
            display_name=node.child_text("displayName"),
            description=node.child_text("description"),
            qualifier=self._parse_qualifier(wire_child("qualifier")),
            style=PortStyle(style_node.label),
            on_master=self._parse_wire_port(on_master) if on_master is not None else None,
            on_slave=self._parse_wire_port(on_slave) if on_slave is not None else None,
            default_value=self._parse_int(default_value) if default_value is not None else None,
        )

    def _parse_qualifier(self, node: Optional[SchemaNode]) -> Optional[Qualifier]:
        if node is None:
            return None
        for child in node.children():
            if child.text == "true":
                qualifier = Qualifier.from_tag(child.label)
                if qualifier is not None:
                    return qualifier
        return Qualifier.from_tag(node.text)

    def _parse_wire_port(self, node: SchemaNode) -> WirePort:
        direction = None
        direction_text = node.child_text("direction")
        if direction_text is not None:
            try:
                direction = WirePortDirection(direction_text.lower())
            except ValueError:
                raise self._error(f"Unknown wire direction '{direction_text}'", node)

        return WirePort(
            presence=Presence.from_string(node.child_text("presence")),
            width=self._optional_int(node, "width"),
            direction=direction,
        )

    # --- Bus definitions ---

    def _parse_bus_definition(self, node: SchemaNode) -> BusDefinition:
        max_masters = self._optional_int(node, "maxMasters")
        max_slaves = self._optional_int(node, "maxSlaves")
        return BusDefinition(
            vlnv=self._parse_vlnv(node),
            direct_connection=self._parse_bool(self._required_child(node, "directConnection")),
            addressable=self._parse_bool(self._required_child(node, "isAddressable")),
            extends=[self._parse_ref(n) for n in node.children("extends")],
            max_masters=max_masters if max_masters is not None else -1,
            max_slaves=max_slaves if max_slaves is not None else -1,
        )

    # --- Components ---

    def _parse_component(self, node: SchemaNode) -> Component:
        return Component(
            vlnv=self._parse_vlnv(node),
            bus_interfaces=self._parse_list(
                node.path("busInterfaces", "busInterface"),
                "busInterface",
                self._parse_bus_interface,
            ),
        )

    def _parse_bus_interface(self, node: SchemaNode) -> BusInterface:
        name = self._required_text(node, "name")

        mode = None
        for child in node.children():
            mode = InterfaceMode.from_tag(child.label)
            if mode is not None:
                break
        if mode is None:
            raise self._error(f"Bus interface '{name}' has no interface mode", node)

        abstraction_node = node.child("abstractionType")
        connection_node = node.child("connectionRequired")

        return BusInterface(
            name=name,
            display_name=node.child_text("displayName"),
            description=node.child_text("description"),
            bus_type=self._parse_ref(self._required_child(node, "busType")),
            abstraction_type=(
                self._parse_ref(abstraction_node) if abstraction_node is not None else None
            ),
            mode=mode,
            connection_required=(
                self._parse_bool(connection_node) if connection_node is not None else False
            ),
            port_maps=self._parse_list(
                node.path("portMaps", "portMap"), "portMap", self._parse_port_map
            ),
            parameters=[
                Parameter(name=p.child_text("name"), value=p.child_text("value"))
                for p in node.path("parameters", "parameter")
            ],
        )

    def _parse_port_map(self, node: SchemaNode) -> PortMap:
        logical = self._required_child(node, "logicalPort")
        physical = node.child("physicalPort")
        if physical is None:
            physical_name, physical_range = "", None
        else:
            physical_name = physical.child_text("name") or ""
            physical_range = self._parse_vector(physical.child("vector"))

        return PortMap(
            logical_name=self._required_text(logical, "name"),
            logical_range=self._parse_vector(logical.child("vector")),
            physical_name=physical_name,
            physical_range=physical_range,
        )

    def _parse_vector(self, node: Optional[SchemaNode]) -> Optional[Vector]:
        if node is None:
            return None
        return Vector(left=self._optional_int(node, "left"), right=self._optional_int(node, "right"))

    # --- Designs ---

    def _parse_design(self, node: SchemaNode) -> Design:
        return Design(
            vlnv=self._parse_vlnv(node),
            component_instances=self._parse_list(
                node.path("componentInstances", "componentInstance"),
                "componentInstance",
                self._parse_component_instance,
            ),
        )

    def _parse_component_instance(self, node: SchemaNode) -> ComponentInstance:
        values = []
        for cev in node.path("configurableElementValues", "configurableElementValue"):
            reference_id = cev.attr(SPIRIT_PREFIX, "referenceId")
            if reference_id is None:
                raise self._error("configurableElementValue missing spirit:referenceId", cev)
            values.append(ConfigurableElementValue(reference_id=reference_id, value=cev.text))

        return ComponentInstance(
            instance_name=self._required_text(node, "instanceName"),
            component_ref=self._parse_ref(self._required_child(node, "componentRef")),
            configurable_element_values=values,
        )

    # --- Xilinx parameter abstraction catalogs ---

    def _parse_parameter_abstraction_definition(
        self, node: SchemaNode
    ) -> ParameterAbstractionDefinition:
        return ParameterAbstractionDefinition(
            vlnv=self._parse_vlnv(node),
            parameters=self._parse_list(
                node.children("parameterAbstraction"),
                "parameterAbstraction",
                self._parse_parameter_abstraction,
            ),
        )

    def _parse_parameter_abstraction(self, node: SchemaNode) -> ParameterAbstraction:
        logical_name = node.attr(XILINX_PREFIX, "logicalName")
        if not logical_name:
            raise self._error("parameterAbstraction missing xilinx:logicalName", node)

        required = node.attr(XILINX_PREFIX, "required")
        if required not in (None, "true", "false"):
            raise self._error(f"xilinx:required expected 'true' or 'false', got '{required}'", node)

        return ParameterAbstraction(
            logical_name=logical_name,
            format=node.attr(SPIRIT_PREFIX, "format") or "",
            default=node.attr(XILINX_PREFIX, "default") or "",
            provider=node.attr(XILINX_PREFIX, "provider") or "",
            required=required == "true",
            usage=node.attr(XILINX_PREFIX, "usage") or "",
            permission=node.attr(XILINX_PREFIX, "permission") or "",
        )

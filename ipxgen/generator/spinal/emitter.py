"""
SpinalHDL BlackBox emitter.

Turns a component instance of a design into a Scala source unit: a
``BlackBox`` whose ``io`` bundle has one field per bus interface that can
be generated, the type declarations those fields need, and a deduplicated
import section.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from jinja2 import Environment

from ipxgen.generator.base_generator import (
    AbstractionGenerator,
    create_template_environment,
    get_template_environment,
)
from ipxgen.generator.config import BusConfig
from ipxgen.generator.errors import GenerationError, UnsupportedFeatureError
from ipxgen.model import (
    BusInterface,
    Component,
    ComponentInstance,
    DefinitionRegistry,
    Design,
    InterfaceMode,
    UnknownReferenceError,
)

logger = logging.getLogger(__name__)

COMMON_IMPORTS = ["spinal.core._", "spinal.lib._"]

# SpinalHDL direction helper applied to the bus instance, per interface mode
MODE_WRAPPERS = {
    InterfaceMode.MASTER: "master",
    InterfaceMode.SLAVE: "slave",
    InterfaceMode.MIRRORED_MASTER: "slave",
    InterfaceMode.MIRRORED_SLAVE: "master",
    InterfaceMode.MONITOR: "in",
}


@dataclass
class ScalaField:
    """``val <name> = <expression>`` inside the BlackBox io bundle."""

    name: str
    expression: str


@dataclass
class BusCode:
    """Generated code for one bus interface."""

    scala_field: ScalaField
    imports: List[str] = field(default_factory=list)
    declaration: Optional[str] = None


@dataclass
class ScalaUnit:
    """
    One generated Scala source file.

    Collects fields, type declarations and imports; formatting is left to
    the template.
    """

    name: str
    fields: List[ScalaField] = field(default_factory=list)
    declarations: List[str] = field(default_factory=list)
    _imports: Dict[str, None] = field(default_factory=dict)

    def add_imports(self, imports: List[str]) -> None:
        for lib in imports:
            if lib not in COMMON_IMPORTS:
                self._imports[lib] = None

    def add_field(self, scala_field: ScalaField, imports: List[str]) -> None:
        self.fields.append(scala_field)
        self.add_imports(imports)

    def add_declaration(self, declaration: str) -> None:
        if declaration not in self.declarations:
            self.declarations.append(declaration)

    def add_bus(self, code: BusCode) -> None:
        self.add_field(code.scala_field, code.imports)
        if code.declaration:
            self.add_declaration(code.declaration)

    @property
    def imports(self) -> List[str]:
        """Imports beyond the common ones, sorted."""
        return sorted(self._imports)

    def render(self, env: Environment, indent: int = 2) -> str:
        template = env.get_template("blackbox.scala.j2")
        return template.render(
            name=self.name,
            tab=" " * indent,
            common_imports=COMMON_IMPORTS,
            imports=self.imports,
            fields=self.fields,
            declarations=self.declarations,
        )


class SpinalEmitter:
    """
    Emission driver for component instances.

    Resolves each instance's component in the registry, scopes the
    instance configuration to every bus interface and asks the interface's
    abstraction to generate itself.

    Bus interfaces that cannot be generated (no abstraction type, unknown
    reference, missing mandatory configuration, unsupported mode) are
    skipped with a log message. ``UnsupportedFeatureError`` is propagated.
    """

    def __init__(
        self,
        registry: DefinitionRegistry,
        indent: int = 2,
        template_dir: Optional[str] = None,
    ):
        self.registry = registry
        self.indent = indent
        self.env = (
            create_template_environment(template_dir)
            if template_dir
            else get_template_environment()
        )

    def generate_bus(self, bus: BusInterface, config: Mapping[str, str]) -> Optional[BusCode]:
        """
        Generate the io field for one bus interface.

        Args:
            bus: Bus interface of the component
            config: Configuration scoped to this interface

        Returns:
            BusCode, or None if the interface cannot be generated

        Raises:
            UnknownReferenceError: If the abstraction type is not registered
            GenerationError: If the abstraction cannot generate this configuration
        """
        if bus.abstraction_type is None:
            logger.info("Bus interface '%s' has no abstraction type", bus.name)
            return None

        wrapper = MODE_WRAPPERS.get(bus.mode)
        if wrapper is None:
            logger.info("Bus interface '%s': mode %s is not generated", bus.name, bus.mode.value)
            return None

        abstraction = self.registry.resolve(bus.abstraction_type.to_vlnv())
        if not isinstance(abstraction, AbstractionGenerator):
            raise GenerationError(
                f"{type(abstraction).__name__} is not an abstraction", bus.abstraction_type
            )

        produced = abstraction.produce_instance(config, self.registry)
        if produced is None:
            logger.info("Bus interface '%s': abstraction produced no instance", bus.name)
            return None
        expression, imports = produced

        declaration = None
        type_code = abstraction.produce_type(self.indent, config, self.registry)
        if type_code is not None:
            declaration, type_imports = type_code
            imports = imports + type_imports

        return BusCode(
            scala_field=ScalaField(name=bus.name, expression=f"{wrapper}({expression})"),
            imports=imports,
            declaration=declaration,
        )

    def build_unit(
        self, instance: ComponentInstance, extra_config: Optional[Mapping[str, str]] = None
    ) -> ScalaUnit:
        """
        Build the Scala unit for a component instance.

        Args:
            instance: Component instance from a design
            extra_config: Values overriding the instance's configurable elements

        Raises:
            UnknownReferenceError: If the component is not registered
            UnsupportedFeatureError: If a bus asks for an unsupported feature
        """
        component = self.registry.resolve(instance.component_ref.to_vlnv())
        if not isinstance(component, Component):
            raise GenerationError(
                f"{type(component).__name__} is not a component", instance.component_ref
            )

        config = instance.config()
        config.update(extra_config or {})

        unit = ScalaUnit(name=instance.instance_name)
        for bus in component.bus_interfaces:
            bus_config = BusConfig.for_interface(config, bus.name)
            try:
                code = self.generate_bus(bus, bus_config)
            except UnsupportedFeatureError:
                raise
            except (UnknownReferenceError, GenerationError) as e:
                logger.warning("Skipping bus interface '%s': %s", bus.name, e)
                continue
            if code is not None:
                unit.add_bus(code)

        logger.info(
            "%s: generated %d of %d bus interfaces",
            instance.instance_name,
            len(unit.fields),
            len(component.bus_interfaces),
        )
        return unit

    def generate_instance(
        self, instance: ComponentInstance, extra_config: Optional[Mapping[str, str]] = None
    ) -> str:
        """Generate the Scala source for a component instance."""
        return self.build_unit(instance, extra_config).render(self.env, self.indent)

    def generate_design(self, design: Design, all_instances: bool = False) -> Dict[str, str]:
        """
        Generate Scala sources for a design.

        Args:
            design: Parsed design
            all_instances: Generate every instance instead of only the first

        Returns:
            Dictionary mapping instance name to Scala source
        """
        instances = design.component_instances
        if not all_instances:
            instances = instances[:1]
        return {inst.instance_name: self.generate_instance(inst) for inst in instances}

    @staticmethod
    def write(content: str, output_path: Union[str, Path]) -> Path:
        """Write generated source, creating parent directories."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        return output_path

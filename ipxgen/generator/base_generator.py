"""
Base generator interface for SpinalHDL code generation.

Every abstraction the registry can hold (schema-derived or native)
implements ``AbstractionGenerator``. Both operations may legitimately
return ``None``, meaning "this bus cannot be generated"; callers skip the
bus instead of failing the whole run.

Current implementations:
- AbstractionDefinition: generic schema-derived bundle (ipxgen.model.abstraction)
- NativeAxiMMAbstraction, NativeAxisAbstraction, GenericVectorAbstraction:
  hand-written generators for standard buses (ipxgen.generator.spinal.native)
"""

import os
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Mapping, Optional, Tuple

from jinja2 import Environment, FileSystemLoader

if TYPE_CHECKING:
    from ipxgen.model.registry import DefinitionRegistry

# (code, fully qualified imports it needs)
GeneratedCode = Tuple[str, List[str]]

DEFAULT_TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")

_environment: Optional[Environment] = None


def create_template_environment(template_dir: Optional[str] = None) -> Environment:
    """Build the Jinja2 environment used for all Scala templates."""
    return Environment(
        loader=FileSystemLoader(template_dir or DEFAULT_TEMPLATE_DIR),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def get_template_environment() -> Environment:
    """Get or create the shared template environment."""
    global _environment
    if _environment is None:
        _environment = create_template_environment()
    return _environment


class AbstractionGenerator(ABC):
    """
    Code generation capability of a bus abstraction.

    ``config`` is the interface-scoped configuration (a ``BusConfig`` or any
    string mapping, looked up case-insensitively). The registry is always
    passed explicitly.
    """

    @abstractmethod
    def produce_instance(
        self, config: Mapping[str, str], registry: "DefinitionRegistry"
    ) -> Optional[GeneratedCode]:
        """
        Produce the expression instantiating this bus.

        Args:
            config: Interface-scoped configuration values
            registry: Definition registry for catalog/type lookups

        Returns:
            ``(expression, imports)`` or None if the bus cannot be generated
        """

    @abstractmethod
    def produce_type(
        self, indent: int, config: Mapping[str, str], registry: "DefinitionRegistry"
    ) -> Optional[GeneratedCode]:
        """
        Produce the type declaration the instance expression refers to.

        Args:
            indent: Number of spaces per indentation level
            config: Interface-scoped configuration values
            registry: Definition registry

        Returns:
            ``(declaration, imports)`` or None when no declaration is needed
        """

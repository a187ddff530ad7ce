"""
Definition Registry module.

Indexes every parsed definition of a metadata corpus by VLNV. Entities
refer to one another only through VLNVs, so the registry is the single
place where cross-document references are resolved.
"""

import logging
import time
from pathlib import Path
from typing import (
    TYPE_CHECKING,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from ipxgen.generator.base_generator import AbstractionGenerator

from .abstraction import AbstractionDefinition
from .base import VLNV
from .bus import BusDefinition
from .component import Component
from .xilinx import ParameterAbstractionDefinition

if TYPE_CHECKING:
    from ipxgen.parser.xml.ipxact_parser import IpxactXmlParser

logger = logging.getLogger(__name__)

# Native generators enter the registry only through ``override``
Definition = Union[
    BusDefinition,
    AbstractionDefinition,
    Component,
    ParameterAbstractionDefinition,
    AbstractionGenerator,
]

# Parsed entities that carry an identifier and belong in the registry
REGISTERED_TYPES = (
    BusDefinition,
    AbstractionDefinition,
    Component,
    ParameterAbstractionDefinition,
)

T = TypeVar("T")


class UnknownReferenceError(LookupError):
    """A VLNV was looked up but is not in the registry."""

    def __init__(self, vlnv: VLNV):
        self.vlnv = vlnv
        super().__init__(f"Unknown reference: {vlnv}")


class DefinitionRegistry:
    """
    Mapping from VLNV to definition.

    Built once from a corpus, then treated as immutable: ``override``
    returns a new registry instead of patching this one.
    """

    def __init__(self, definitions: Optional[Mapping[VLNV, Definition]] = None):
        """Initialize with pre-loaded definitions."""
        self._definitions: Dict[VLNV, Definition] = dict(definitions or {})

    @classmethod
    def load(
        cls,
        files: Iterable[Union[str, Path]],
        parser: Optional["IpxactXmlParser"] = None,
    ) -> "DefinitionRegistry":
        """
        Parse every file and index the resulting definitions.

        Files that fail to parse are logged and skipped. Parsed documents
        that are not registry definitions (designs, foreign XML) are
        dropped. On duplicate identifiers the file parsed last wins.

        Args:
            files: XML files, in the order they should be applied
            parser: Parser to use (defaults to a new IpxactXmlParser)

        Returns:
            DefinitionRegistry instance
        """
        from ipxgen.parser.xml.errors import ParseError
        from ipxgen.parser.xml.ipxact_parser import IpxactXmlParser

        parser = parser or IpxactXmlParser()
        definitions: Dict[VLNV, Definition] = {}
        failed = 0
        start = time.perf_counter()

        for file_path in files:
            try:
                parsed = parser.parse_file(file_path)
            except ParseError as e:
                failed += 1
                logger.warning("Skipping %s: %s", file_path, e)
                continue

            if not isinstance(parsed, REGISTERED_TYPES):
                continue

            if parsed.vlnv in definitions:
                logger.debug("%s redefined by %s", parsed.vlnv, file_path)
            definitions[parsed.vlnv] = parsed

        logger.info(
            "Loaded %d definitions (%d files failed) in %.3f s",
            len(definitions),
            failed,
            time.perf_counter() - start,
        )
        return cls(definitions)

    def override(self, mapping: Mapping[VLNV, Definition]) -> "DefinitionRegistry":
        """
        Return a new registry with the given identifiers replaced.

        Identifiers not in ``mapping`` are unchanged. This registry is not
        modified.
        """
        definitions = dict(self._definitions)
        definitions.update(mapping)
        return DefinitionRegistry(definitions)

    def resolve(self, vlnv: VLNV) -> Definition:
        """
        Get a definition by identifier.

        Raises:
            UnknownReferenceError: If the identifier is not registered
        """
        try:
            return self._definitions[vlnv]
        except KeyError:
            raise UnknownReferenceError(vlnv) from None

    def get(self, vlnv: VLNV) -> Optional[Definition]:
        """Get a definition by identifier, or None."""
        return self._definitions.get(vlnv)

    def of_type(self, definition_type: Type[T]) -> List[T]:
        """Get all definitions of one kind."""
        return [d for d in self._definitions.values() if isinstance(d, definition_type)]

    def items(self) -> Iterator[Tuple[VLNV, Definition]]:
        return iter(self._definitions.items())

    def summary(self) -> Dict[str, int]:
        """Count definitions per kind."""
        return {
            "busDefinitions": len(self.of_type(BusDefinition)),
            "abstractionDefinitions": len(self.of_type(AbstractionDefinition)),
            "components": len(self.of_type(Component)),
            "parameterAbstractionDefinitions": len(
                self.of_type(ParameterAbstractionDefinition)
            ),
        }

    def __contains__(self, vlnv: object) -> bool:
        return vlnv in self._definitions

    def __iter__(self) -> Iterator[VLNV]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DefinitionRegistry):
            return NotImplemented
        return self._definitions == other._definitions

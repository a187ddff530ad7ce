"""
Hand-written SpinalHDL generators for standard Xilinx buses.

These replace the schema-derived abstraction definitions of well-known
buses (see ``native_buses.yml``) and emit the protocol classes of the
SpinalHDL library instead of a generic bundle. The AXI generators read
their defaults from the matching Xilinx parameter abstraction catalog and
translate the vendor parameter names into SpinalHDL config arguments.
"""

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import Field

from ipxgen.generator.base_generator import AbstractionGenerator, GeneratedCode
from ipxgen.generator.config import BusConfig
from ipxgen.generator.errors import MissingConfigurationError, UnsupportedFeatureError
from ipxgen.model.base import VLNV, StrictModel
from ipxgen.model.xilinx import ParameterAbstractionDefinition

if TYPE_CHECKING:
    from ipxgen.model.registry import DefinitionRegistry

logger = logging.getLogger(__name__)

AXIMM_CATALOG = VLNV(vendor="xilinx.com", library="interface.param", name="aximm", version="1.0")
AXIS_CATALOG = VLNV(vendor="xilinx.com", library="interface.param", name="axis", version="1.0")


def _verbatim(value: str) -> str:
    return value


def _flag(value: str) -> str:
    """Xilinx encodes booleans as '1'/'0'."""
    return "true" if value == "1" else "false"


# (vendor parameter, SpinalHDL argument, converter); argument order follows this table
ParameterTable = List[Tuple[str, str, Callable[[str], str]]]

AXI4_PARAMETERS: ParameterTable = [
    ("data_width", "dataWidth", _verbatim),
    ("addr_width", "addressWidth", _verbatim),
    ("id_width", "idWidth", _verbatim),
    ("has_region", "useRegion", _flag),
    ("has_burst", "useBurst", _flag),
    ("has_lock", "useLock", _flag),
    ("has_prot", "useProt", _flag),
    ("has_cache", "useCache", _flag),
    ("has_qos", "useQos", _flag),
    ("has_wstrb", "useStrb", _flag),
    ("has_bresp", "useResp", _flag),
    ("has_rresp", "useResp", _flag),
    ("aruser_width", "arUserWidth", _verbatim),
    ("awuser_width", "awUserWidth", _verbatim),
    ("ruser_width", "rUserWidth", _verbatim),
    ("wuser_width", "wUserWidth", _verbatim),
    ("buser_width", "bUserWidth", _verbatim),
]
AXI4_FORCED = {"useLen": "true"}

AXIS_PARAMETERS: ParameterTable = [
    ("tdata_num_bytes", "dataWidth", _verbatim),
    ("tdest_width", "destWidth", _verbatim),
    ("tid_width", "idWidth", _verbatim),
    ("tuser_width", "userWidth", _verbatim),
    ("has_tstrb", "useStrb", _flag),
    ("has_tkeep", "useKeep", _flag),
    ("has_tlast", "useLast", _flag),
]
AXIS_FORCED = {"useId": "true", "useDest": "true", "useUser": "true"}


def merge_catalog_defaults(
    catalog: VLNV, config: Mapping[str, str], registry: "DefinitionRegistry"
) -> Dict[str, str]:
    """
    Overlay instance configuration on the catalog defaults.

    Instance values win; a missing catalog contributes no defaults, and
    neither do catalog entries with an empty default.

    Returns:
        Merged configuration with lower-cased keys
    """
    definition = registry.get(catalog)
    if isinstance(definition, ParameterAbstractionDefinition):
        defaults = {key: value for key, value in definition.defaults().items() if value}
    else:
        logger.debug("Parameter catalog %s not registered, using instance values only", catalog)
        defaults = {}
    return BusConfig.merged(defaults, BusConfig.coerce(config)).lowered()


def translate_parameters(
    config: Mapping[str, str], table: ParameterTable, forced: Mapping[str, str]
) -> Dict[str, str]:
    """
    Rename vendor parameters to SpinalHDL arguments.

    Several vendor flags may feed one argument (``has_bresp``/``has_rresp``);
    the argument is enabled if any of them is. ``forced`` arguments are
    always set and come last.
    """
    args: Dict[str, str] = {}
    for key, argument, convert in table:
        if key not in config:
            continue
        value = convert(config[key])
        if args.get(argument) == "true":
            continue
        args[argument] = value
    for argument, value in forced.items():
        args[argument] = value
    return args


def format_arguments(args: Mapping[str, str]) -> str:
    return ", ".join(f"{k} = {v}" for k, v in args.items())


class NativeAxiMMAbstraction(StrictModel, AbstractionGenerator):
    """AXI memory-mapped bus as ``spinal.lib.bus.amba4.axi.Axi4``."""

    vlnv: VLNV = Field(
        default_factory=lambda: VLNV(
            vendor="spinal", library="interface", name="aximm", version="1.0"
        )
    )

    def produce_instance(
        self, config: Mapping[str, str], registry: "DefinitionRegistry"
    ) -> Optional[GeneratedCode]:
        merged = merge_catalog_defaults(AXIMM_CATALOG, config, registry)
        if "protocol" not in merged:
            raise MissingConfigurationError("AXI interface has no PROTOCOL", self.vlnv)

        protocol = merged["protocol"].lower()
        if protocol == "axi4":
            args = translate_parameters(merged, AXI4_PARAMETERS, AXI4_FORCED)
            return (
                f"Axi4(Axi4Config({format_arguments(args)}))",
                ["spinal.lib.bus.amba4.axi.Axi4", "spinal.lib.bus.amba4.axi.Axi4Config"],
            )
        if protocol == "axi3":
            raise UnsupportedFeatureError("AXI3 is not supported by the native AXI translation")

        logger.debug("No native translation for AXI protocol '%s'", protocol)
        return None

    def produce_type(
        self, indent: int, config: Mapping[str, str], registry: "DefinitionRegistry"
    ) -> Optional[GeneratedCode]:
        return None


class NativeAxisAbstraction(StrictModel, AbstractionGenerator):
    """AXI4-Stream bus as ``spinal.lib.bus.amba4.axis.Axi4Stream``."""

    vlnv: VLNV = Field(
        default_factory=lambda: VLNV(
            vendor="spinal", library="interface", name="axis", version="1.0"
        )
    )

    def produce_instance(
        self, config: Mapping[str, str], registry: "DefinitionRegistry"
    ) -> Optional[GeneratedCode]:
        merged = merge_catalog_defaults(AXIS_CATALOG, config, registry)
        if "has_tready" in merged and merged["has_tready"] != "1":
            raise UnsupportedFeatureError(
                "HAS_TREADY=0 is not supported in native Axi4Stream translations"
            )

        args = translate_parameters(merged, AXIS_PARAMETERS, AXIS_FORCED)
        return (
            f"Axi4Stream(Axi4StreamConfig({format_arguments(args)}))",
            [
                "spinal.lib.bus.amba4.axis.Axi4Stream",
                "spinal.lib.bus.amba4.axis.Axi4StreamConfig",
            ],
        )

    def produce_type(
        self, indent: int, config: Mapping[str, str], registry: "DefinitionRegistry"
    ) -> Optional[GeneratedCode]:
        return None


class GenericVectorAbstraction(StrictModel, AbstractionGenerator):
    """Undirected bit vector for clock, reset and interrupt signals."""

    vlnv: VLNV = Field(
        default_factory=lambda: VLNV(
            vendor="spinal", library="interface", name="generic", version="1.0"
        )
    )

    def produce_instance(
        self, config: Mapping[str, str], registry: "DefinitionRegistry"
    ) -> Optional[GeneratedCode]:
        width = BusConfig.coerce(config).get("portwidth", "0")
        return f"Bits({width} bit)", ["spinal.core.Bits"]

    def produce_type(
        self, indent: int, config: Mapping[str, str], registry: "DefinitionRegistry"
    ) -> Optional[GeneratedCode]:
        return None


NATIVE_GENERATORS = {
    "aximm": NativeAxiMMAbstraction,
    "axis": NativeAxisAbstraction,
    "vector": GenericVectorAbstraction,
}

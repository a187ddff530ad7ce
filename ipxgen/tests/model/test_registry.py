"""
Test DefinitionRegistry loading, lookup and overrides.
"""

import logging

import pytest

from ipxgen.model import (
    VLNV,
    AbstractionDefinition,
    BusDefinition,
    Component,
    DefinitionRegistry,
    ParameterAbstractionDefinition,
    UnknownReferenceError,
)
from ipxgen.tests.xml_samples import AXIMM_BUSDEF, WIDGET_DESIGN

AXIMM_RTL = VLNV.from_string("xilinx.com:interface:aximm_rtl:1.0")
AXIMM_BUS = VLNV.from_string("xilinx.com:interface:aximm:1.0")
WIDGET = VLNV.from_string("acme.com:ip:widget:1.0")


class TestRegistryLoad:
    def test_loads_every_definition_kind(self, raw_registry):
        assert raw_registry.summary() == {
            "busDefinitions": 1,
            "abstractionDefinitions": 3,
            "components": 1,
            "parameterAbstractionDefinitions": 1,
        }
        assert len(raw_registry) == 6
        assert isinstance(raw_registry.resolve(AXIMM_BUS), BusDefinition)
        assert isinstance(raw_registry.resolve(AXIMM_RTL), AbstractionDefinition)
        assert isinstance(raw_registry.resolve(WIDGET), Component)
        catalog = raw_registry.resolve(VLNV.from_string("xilinx.com:interface.param:aximm:1.0"))
        assert isinstance(catalog, ParameterAbstractionDefinition)

    def test_broken_file_is_skipped_with_warning(self, corpus_dir, caplog):
        from ipxgen.utils import discover_xml_files

        with caplog.at_level(logging.WARNING, logger="ipxgen.model.registry"):
            registry = DefinitionRegistry.load(discover_xml_files([corpus_dir]))

        assert len(registry) == 6
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "broken.xml" in warnings[0]

    def test_designs_are_not_registered(self, write_xml):
        design = write_xml("d/design.xml", WIDGET_DESIGN)
        registry = DefinitionRegistry.load([design])
        assert len(registry) == 0

    def test_last_file_wins_on_duplicate(self, write_xml):
        first = write_xml("a/aximm.xml", AXIMM_BUSDEF)
        second = write_xml(
            "b/aximm.xml", AXIMM_BUSDEF.replace("<spirit:maxSlaves>16", "<spirit:maxSlaves>4")
        )

        registry = DefinitionRegistry.load([first, second])
        assert registry.resolve(AXIMM_BUS).max_slaves == 4

        registry = DefinitionRegistry.load([second, first])
        assert registry.resolve(AXIMM_BUS).max_slaves == 16

    def test_empty_input(self):
        registry = DefinitionRegistry.load([])
        assert len(registry) == 0
        assert list(registry) == []


class TestRegistryLookup:
    def test_resolve_unknown_raises(self, raw_registry):
        missing = VLNV.from_string("acme.com:interface:nothing_rtl:1.0")
        with pytest.raises(UnknownReferenceError) as exc_info:
            raw_registry.resolve(missing)
        assert exc_info.value.vlnv == missing
        assert "acme.com:interface:nothing_rtl:1.0" in str(exc_info.value)

    def test_version_is_part_of_identity(self, raw_registry):
        assert AXIMM_RTL in raw_registry
        assert VLNV.from_string("xilinx.com:interface:aximm_rtl:2.0") not in raw_registry
        assert raw_registry.get(VLNV.from_string("xilinx.com:interface:aximm_rtl:2.0")) is None

    def test_of_type(self, raw_registry):
        names = sorted(d.vlnv.name for d in raw_registry.of_type(AbstractionDefinition))
        assert names == ["aximm_rtl", "clock_rtl", "gpio_rtl"]


class TestRegistryOverride:
    def test_override_replaces_only_given_keys(self, raw_registry):
        replacement = object()
        overridden = raw_registry.override({AXIMM_RTL: replacement})

        assert overridden.resolve(AXIMM_RTL) is replacement
        assert overridden.resolve(WIDGET) is raw_registry.resolve(WIDGET)
        assert len(overridden) == len(raw_registry)

    def test_override_does_not_mutate(self, raw_registry):
        original = raw_registry.resolve(AXIMM_RTL)
        raw_registry.override({AXIMM_RTL: object()})
        assert raw_registry.resolve(AXIMM_RTL) is original

    def test_override_can_add(self, raw_registry):
        extra = VLNV.from_string("acme.com:interface:extra:1.0")
        overridden = raw_registry.override({extra: object()})
        assert extra in overridden
        assert extra not in raw_registry

    def test_override_is_idempotent(self, raw_registry):
        mapping = {AXIMM_RTL: object()}
        once = raw_registry.override(mapping)
        assert once.override(mapping) == once

import os
import sys

import pytest

# Add the project root to sys.path so that ipxgen is importable
# This is needed because of the flat layout structure
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from ipxgen.tests.xml_samples import (
    AXIMM_ABSDEF,
    AXIMM_BUSDEF,
    AXIMM_CATALOG,
    CLOCK_ABSDEF,
    FOREIGN_XML,
    GPIO_ABSDEF,
    MALFORMED_XML,
    WIDGET_COMPONENT,
    WIDGET_DESIGN,
)


@pytest.fixture
def write_xml(tmp_path):
    """Write an XML document below tmp_path and return its path."""

    def _write(relative, content):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def corpus_dir(write_xml, tmp_path):
    """Directory holding a small but complete metadata corpus."""
    write_xml("corpus/busdef/aximm_rtl.xml", AXIMM_ABSDEF)
    write_xml("corpus/busdef/aximm.xml", AXIMM_BUSDEF)
    write_xml("corpus/busdef/aximm_param.xml", AXIMM_CATALOG)
    write_xml("corpus/busdef/clock_rtl.xml", CLOCK_ABSDEF)
    write_xml("corpus/ip/gpio_rtl.xml", GPIO_ABSDEF)
    write_xml("corpus/ip/widget/component.xml", WIDGET_COMPONENT)
    write_xml("corpus/ip/readme.txt", "not xml")
    write_xml("corpus/ip/project.xml", FOREIGN_XML)
    write_xml("corpus/ip/broken.xml", MALFORMED_XML)
    return tmp_path / "corpus"


@pytest.fixture
def design_file(write_xml):
    return write_xml("widget_0.xci", WIDGET_DESIGN)


@pytest.fixture
def raw_registry(corpus_dir):
    """Registry of the test corpus, before native overrides."""
    from ipxgen.model import DefinitionRegistry
    from ipxgen.utils import discover_xml_files

    return DefinitionRegistry.load(discover_xml_files([corpus_dir]))


@pytest.fixture
def registry(raw_registry):
    """Registry of the test corpus with native generators applied."""
    from ipxgen.generator.spinal import apply_native_overrides

    return apply_native_overrides(raw_registry)

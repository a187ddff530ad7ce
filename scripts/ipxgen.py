#!/usr/bin/env python3
"""
ipxgen - SpinalHDL BlackBox generation from IP-XACT metadata.

Usage:
    python scripts/ipxgen.py generate zynq_ultra_ps_e_0_0.xci
    python scripts/ipxgen.py generate design.xci --xilinx-dir /opt/Xilinx/Vivado/2022.1 -o build/
    python scripts/ipxgen.py summary --corpus ./ipxact

Subcommands:
    generate    Generate a SpinalHDL BlackBox from a design (.xci)
    summary     Load the metadata corpus and report what it contains
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ipxgen.generator.errors import GenerationError
from ipxgen.generator.spinal import SpinalEmitter, apply_native_overrides
from ipxgen.model import DefinitionRegistry, UnknownReferenceError
from ipxgen.parser import IpxactXmlParser, ParseError
from ipxgen.utils import discover_xml_files, xilinx_corpus_dirs

logger = logging.getLogger("ipxgen")


def corpus_roots(args) -> list:
    """Directories to scan: explicit --corpus dirs, else the Xilinx install."""
    if args.corpus:
        return [Path(c) for c in args.corpus]
    return xilinx_corpus_dirs(args.xilinx_dir)


def load_registry(args, parser: IpxactXmlParser) -> DefinitionRegistry:
    files = discover_xml_files(corpus_roots(args))
    logger.info("Parsing %d XML files", len(files))
    registry = DefinitionRegistry.load(files, parser)
    for kind, count in registry.summary().items():
        logger.info("Loaded %d %s", count, kind)
    return registry


def cmd_generate(args):
    """Generate SpinalHDL BlackBox sources from a design."""
    parser = IpxactXmlParser()

    try:
        registry = apply_native_overrides(load_registry(args, parser))
        design = parser.parse_design(args.design)

        emitter = SpinalEmitter(registry, indent=args.indent)
        sources = emitter.generate_design(design, all_instances=args.all_instances)

        output_dir = Path(args.output)
        written = {}
        for instance_name, content in sources.items():
            path = emitter.write(content, output_dir / f"{instance_name}.scala")
            written[instance_name] = str(path)
            logger.info("Written: %s", path)

        if args.json:
            print(json.dumps({"success": True, "files": written, "count": len(written)}))
        else:
            print(f"\n✓ Generated {len(written)} file(s) to: {output_dir}")
            for instance_name, path in written.items():
                print(f"  {instance_name:24} {path}")

    except (ParseError, UnknownReferenceError, GenerationError, ValueError) as e:
        if args.json:
            print(json.dumps({"success": False, "error": str(e)}))
        else:
            print(f"Error: {e}")
        sys.exit(1)


def cmd_summary(args):
    """Report the definitions found in the corpus."""
    try:
        registry = load_registry(args, IpxactXmlParser())
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    summary = registry.summary()
    if args.json:
        print(json.dumps({"success": True, "total": len(registry), **summary}))
    else:
        print(f"\n{len(registry)} definitions:")
        for kind, count in summary.items():
            print(f"  {kind:32} {count}")


def add_corpus_arguments(sub):
    sub.add_argument(
        "--xilinx-dir", help="Xilinx installation (default: $XILINX_INSTALL_DIR)"
    )
    sub.add_argument(
        "--corpus",
        action="append",
        help="Metadata directory to scan instead of the Xilinx installation (repeatable)",
    )
    sub.add_argument("--json", action="store_true", help="JSON output")


def main():
    parser = argparse.ArgumentParser(
        prog="ipxgen", description="SpinalHDL BlackBox generation from IP-XACT metadata"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # generate subcommand
    gen_parser = subparsers.add_parser("generate", help="Generate SpinalHDL from a design")
    gen_parser.add_argument("design", help="Design file (.xci)")
    gen_parser.add_argument(
        "--output", "-o", default="build", help="Output directory (default: build)"
    )
    gen_parser.add_argument(
        "--all-instances",
        action="store_true",
        help="Generate every component instance, not only the first",
    )
    gen_parser.add_argument("--indent", type=int, default=2, help="Indentation width")
    add_corpus_arguments(gen_parser)
    gen_parser.set_defaults(func=cmd_generate)

    # summary subcommand
    summary_parser = subparsers.add_parser("summary", help="Summarize the metadata corpus")
    add_corpus_arguments(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()

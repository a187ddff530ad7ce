"""Shared utility helpers for ipxgen."""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

# Bundled native bus override table
NATIVE_BUSES_PATH = (
    Path(__file__).resolve().parent.parent / "generator" / "spinal" / "native_buses.yml"
)

# Environment variable pointing at a Vivado/Vitis installation
XILINX_INSTALL_DIR_ENV = "XILINX_INSTALL_DIR"

# Corpus locations inside a Xilinx installation
XILINX_IP_SUBDIR = Path("data") / "ip"
XILINX_BUSDEF_SUBDIR = Path("data") / "rsb" / "busdef"

PathLike = Union[str, Path]


def xilinx_install_dir(install_dir: Optional[PathLike] = None) -> Path:
    """Resolve the Xilinx installation directory.

    Args:
        install_dir: Explicit directory; falls back to ``$XILINX_INSTALL_DIR``.

    Raises:
        ValueError: If neither is set.
    """
    if install_dir is None:
        install_dir = os.environ.get(XILINX_INSTALL_DIR_ENV)
    if not install_dir:
        raise ValueError(
            f"Xilinx installation not specified: set {XILINX_INSTALL_DIR_ENV} "
            f"or pass the directory explicitly"
        )
    return Path(install_dir)


def xilinx_corpus_dirs(install_dir: Optional[PathLike] = None) -> List[Path]:
    """Return the IP and bus definition directories of a Xilinx installation."""
    root = xilinx_install_dir(install_dir)
    return [root / XILINX_IP_SUBDIR, root / XILINX_BUSDEF_SUBDIR]


def discover_xml_files(roots: Iterable[PathLike]) -> List[Path]:
    """Recursively collect ``.xml`` files below each root.

    Files are sorted per root so that registry collisions resolve the same
    way on every run. Missing roots are skipped.
    """
    files: List[Path] = []
    for root in roots:
        root = Path(root)
        if not root.is_dir():
            continue
        files.extend(
            sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() == ".xml")
        )
    return files

"""Step 02: parse the PSD folder tree into a catalog of property set definitions.

Every directory named ``psd`` under the root is one schema release (named
by its parent folder). Folders and files are visited in sorted order so
the catalog, and everything generated from it, is reproducible.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from lxml import etree

from psdgen.core.context import CompilationContext
from psdgen.core.step_base import BaseStep
from psdgen.utils.io import write_json
from ._predefined_psets import predefined_psets
from ._psd_reader import PsdFormatError, read_psd
from .config import PsdParseConfig
from .contracts import PsdParseInput, PsdParseOutput

logger = logging.getLogger(__name__)


def find_psd_folders(root: Path) -> list[tuple[str, Path]]:
    """(schema release, psd folder) pairs, sorted by release then path."""
    root = Path(root)
    candidates = [root] if root.name.lower() == "psd" else []
    candidates += [p for p in root.rglob("*") if p.is_dir() and p.name.lower() == "psd"]
    folders = [(p.parent.name.upper(), p) for p in candidates]
    return sorted(folders, key=lambda item: (item[0], item[1].as_posix()))


def find_psd_files(psd_dir: Path, patterns: list[str]) -> list[Path]:
    """Definition files in a psd folder and its subfolders, sorted by relative path."""
    files = {f for pattern in patterns for f in psd_dir.rglob(pattern) if f.is_file()}
    return sorted(files, key=lambda f: f.relative_to(psd_dir).as_posix())


class PsdParseStep(BaseStep[PsdParseInput, PsdParseOutput, PsdParseConfig]):
    name: ClassVar[str] = "psd_parse"
    input_type: ClassVar = PsdParseInput
    output_type: ClassVar = PsdParseOutput
    config_type: ClassVar = PsdParseConfig

    def _root(self, inputs: PsdParseInput) -> Path:
        return self.resolve(inputs.psd_root or Path(self.config.psd_root))

    def validate_inputs(self, inputs: PsdParseInput) -> bool:
        root = self._root(inputs)
        if not root.is_dir():
            logger.error(f"PSD root not found: {root}")
            return False
        if not find_psd_folders(root):
            logger.error(f"No 'psd' folders under {root}")
            return False
        return True

    def collect(self, ctx: CompilationContext, root: Path) -> tuple[int, int]:
        """Parse every release under ``root`` into ``ctx.catalog``.

        Returns (files read, files skipped). A file that cannot be read is
        logged and skipped; the rest of the batch continues.
        """
        patterns = ["Pset_*.xml"]
        if self.config.include_quantity_sets:
            patterns.append("Qto_*.xml")
        wanted = {v.upper() for v in self.config.versions}

        n_ok = n_failed = 0
        for release, psd_dir in find_psd_folders(root):
            if wanted and release not in wanted:
                continue
            files = find_psd_files(psd_dir, patterns)
            logger.info(f"{release}: {len(files)} definition files in {psd_dir}")
            for psd_file in files:
                try:
                    pset = read_psd(psd_file, release)
                except (OSError, etree.XMLSyntaxError, PsdFormatError) as exc:
                    logger.error(f"Skipping {psd_file}: {exc}")
                    n_failed += 1
                    continue
                ctx.catalog.add(release, pset)
                n_ok += 1

            if self.config.include_predefined_psets:
                for pset in predefined_psets(release):
                    ctx.catalog.add(release, pset)
        return n_ok, n_failed

    def run(self, inputs: PsdParseInput) -> PsdParseOutput:
        ctx = CompilationContext()
        n_ok, n_failed = self.collect(ctx, self._root(inputs))

        output_dir = self.data_root / "interim" / "s02_psd_parse"
        output_dir.mkdir(parents=True, exist_ok=True)
        psets_file = write_json(output_dir / "psets.json", ctx.catalog)

        versions = sorted({version for version, _ in ctx.catalog.iter_definitions()})
        name_dump = None
        if self.config.write_name_dump:
            lines = [
                f"{version}\t{pset.name}\t{', '.join(pset.applicable_classes)}"
                for version, pset in ctx.catalog.iter_definitions()
            ]
            name_dump = output_dir / "pset_names.txt"
            name_dump.write_text("\n".join(lines) + "\n", encoding="utf-8")

        logger.info(
            f"Parsed {n_ok} files ({n_failed} skipped): "
            f"{len(ctx.catalog.definitions)} psets, {len(ctx.catalog)} versioned definitions"
        )
        return PsdParseOutput(
            psets_file=psets_file,
            versions=versions,
            num_files=n_ok,
            num_failed=n_failed,
            num_psets=len(ctx.catalog),
            name_dump=name_dump,
        )

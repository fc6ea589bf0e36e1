"""Run orchestration: build the tree, write the structure file, render groups."""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from loguru import logger

from .core.group_templates import write_group_files
from .core.serializer import write_structure
from .core.settings import BuildSettings
from .core.tree_builder import BuildTree, TreeBuilder


@dataclass
class BuildResult:
    tree: BuildTree
    output_path: Path
    group_files: List[Path] = field(default_factory=list)


class StructureBuilder:
    def __init__(self, folder_path, output_file_path, settings: Optional[BuildSettings] = None):
        self.folder_path = Path(folder_path)
        self.output_file_path = Path(output_file_path)
        self.settings = settings or BuildSettings()

    def build(self) -> BuildResult:
        """Write the site structure file and the group files from templates.

        Raises RootNotFoundError or OutputError; everything narrower is
        logged and skipped.
        """
        logger.info("Parsing menu files ...")
        tree_builder = TreeBuilder(self.folder_path, self.settings)
        tree = tree_builder.build()

        logger.info("Writing menu structure file ...")
        write_structure(
            tree.items,
            self.output_file_path,
            escape_quotes=self.settings.escape_quotes,
            encoding=self.settings.output_encoding,
        )

        result = BuildResult(tree=tree, output_path=self.output_file_path)
        logger.info("Writing group files from templates ...")
        for ref in tree.templates:
            logger.info(f"   {ref.path.relative_to(tree_builder.root).as_posix()} ...")
            result.group_files.extend(write_group_files(ref, self.settings))

        logger.info("Done.")
        return result


__all__ = ["StructureBuilder", "BuildResult"]

"""Ingestion pipeline.

Turns a broker CSV export into MappedTrade candidates (csv_source -> mapping
-> timestamps / amounts -> assembler) and submits the valid subset through
the BatchImporter.
"""

from .assembler import map_row, map_rows
from .importer import BatchImporter, ImportResult

__all__ = ["map_row", "map_rows", "BatchImporter", "ImportResult"]

"""
DDL Reorder - DDL Reassembler

Cuts DDL source into per-table text blocks and writes them back out in a
given table order.

A block starts at a CREATE TABLE line and runs, verbatim, up to the line
before the next CREATE TABLE (or end of input). Lines before the first
CREATE TABLE (comments, SET statements, USE db) form the preamble, which is
dropped from the output unless explicitly kept.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .exceptions import InputReadError, OutputWriteError
from .extractor import match_create_table

logger = logging.getLogger(__name__)


@dataclass
class TableBlocks:
    """Verbatim DDL text per table, plus whatever preceded the first table."""
    blocks: Dict[str, str] = field(default_factory=dict)
    preamble: List[str] = field(default_factory=list)

    def __contains__(self, table: str) -> bool:
        return table in self.blocks

    def __len__(self) -> int:
        return len(self.blocks)


def split_blocks(lines: Iterable[str]) -> TableBlocks:
    """
    Group DDL lines into one text block per CREATE TABLE statement.

    Line terminators are normalised to "\\n". A table declared twice keeps
    only its last block.
    """
    result = TableBlocks()
    current_table = None
    current_lines: List[str] = []

    for raw_line in lines:
        line = raw_line.rstrip("\r\n")

        table_name = match_create_table(line)
        if table_name:
            if current_table is not None:
                _seal(result, current_table, current_lines)
            current_table = table_name
            current_lines = []

        if current_table is not None:
            current_lines.append(line + "\n")
        else:
            result.preamble.append(line + "\n")

    if current_table is not None:
        _seal(result, current_table, current_lines)

    return result


def _seal(result: TableBlocks, table: str, lines: List[str]) -> None:
    if table in result.blocks:
        logger.warning("Table %s appears twice; keeping the later definition", table)
    result.blocks[table] = "".join(lines)


def render_blocks(
    blocks: TableBlocks,
    sorted_tables: Iterable[str],
    keep_preamble: bool = False,
) -> str:
    """Concatenate table blocks in the given order."""
    return "".join(ddl for _, ddl in _ordered_chunks(blocks, sorted_tables, keep_preamble))


def write_blocks(
    output_path: str,
    blocks: TableBlocks,
    sorted_tables: Iterable[str],
    keep_preamble: bool = False,
    encoding: str = "utf-8",
) -> int:
    """
    Write table blocks to output_path in the given order.

    Returns:
        Number of table blocks written
    """
    written = 0
    try:
        with open(output_path, "w", encoding=encoding, newline="\n") as f:
            for table, ddl in _ordered_chunks(blocks, sorted_tables, keep_preamble):
                f.write(ddl)
                if table is not None:
                    written += 1
    except (OSError, LookupError, UnicodeEncodeError) as exc:
        raise OutputWriteError(str(output_path), exc) from exc
    return written


def _ordered_chunks(blocks: TableBlocks, sorted_tables: Iterable[str], keep_preamble: bool):
    # Yields (table, ddl); the preamble comes through with table None
    if blocks.preamble:
        if keep_preamble:
            yield None, "".join(blocks.preamble)
        else:
            logger.info("Dropping %d line(s) before the first CREATE TABLE", len(blocks.preamble))

    for table in sorted_tables:
        ddl = blocks.blocks.get(table)
        if ddl is None:
            logger.debug("No DDL block for %s; skipped", table)
            continue
        yield table, ddl


def reorder_ddl_file(
    input_path: str,
    output_path: str,
    sorted_tables: List[str],
    keep_preamble: bool = False,
    encoding: str = "utf-8",
) -> int:
    """Re-read input_path, then write its table blocks in sorted_tables order."""
    try:
        with open(input_path, "r", encoding=encoding) as f:
            blocks = split_blocks(f)
    except (OSError, LookupError, UnicodeDecodeError) as exc:
        raise InputReadError(str(input_path), exc) from exc

    return write_blocks(
        output_path, blocks, sorted_tables,
        keep_preamble=keep_preamble, encoding=encoding,
    )

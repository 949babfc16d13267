"""
DDL Reorder - Pipeline

Runs the three stages in sequence:
1. Extract the foreign-key graph from the DDL lines
2. Sort tables with Kahn's algorithm (fails on cycles)
3. Split the DDL into per-table blocks and emit them in sorted order

The input file is read once and both the extractor and the reassembler scan
the same list of lines independently. Sorting completes before the output
file is opened, so a cycle never leaves a partial file behind.
"""

import io
import logging
from dataclasses import dataclass
from typing import List, Optional

from .config import ReorderConfig
from .exceptions import InputReadError
from .extractor import DependencyGraph, extract_dependencies
from .reassembler import TableBlocks, render_blocks, split_blocks, write_blocks
from .sorter import sort_tables

logger = logging.getLogger(__name__)


@dataclass
class ReorderResult:
    """Outcome of a reorder run."""
    dependencies: DependencyGraph
    sorted_tables: List[str]
    blocks: TableBlocks
    ddl: Optional[str] = None          # set by reorder_ddl
    output_path: Optional[str] = None  # set by process_sql
    tables_written: int = 0


def read_lines(path: str, encoding: str = "utf-8") -> List[str]:
    """Read a DDL file into lines without terminators."""
    try:
        with open(path, "r", encoding=encoding) as f:
            return [line.rstrip("\r\n") for line in f]
    except (OSError, LookupError, UnicodeDecodeError) as exc:
        raise InputReadError(str(path), exc) from exc


def _plan(lines: List[str], config: ReorderConfig) -> ReorderResult:
    deps = extract_dependencies(
        lines,
        inline_references=config.inline_references,
        allow_self_references=config.allow_self_references,
        allow_external_references=config.allow_external_references,
    )
    logger.info(
        "Found %d table(s) and %d foreign key edge(s)",
        len(deps.graph), deps.edge_count(),
    )

    sorted_tables = sort_tables(deps, root_order=config.root_order)
    logger.debug("Sorted order: %s", sorted_tables)

    return ReorderResult(
        dependencies=deps,
        sorted_tables=sorted_tables,
        blocks=split_blocks(lines),
    )


def reorder_ddl(text: str, config: Optional[ReorderConfig] = None) -> ReorderResult:
    """
    Reorder DDL held in memory.

    Example:
        >>> ddl = (
        ...     "CREATE TABLE orders (\\n"
        ...     "  FOREIGN KEY (customer_id) REFERENCES customers(id)\\n"
        ...     ");\\n"
        ...     "CREATE TABLE customers (id INT PRIMARY KEY);\\n"
        ... )
        >>> reorder_ddl(ddl).sorted_tables
        ['customers', 'orders']
    """
    config = config or ReorderConfig()
    lines = [line.rstrip("\r\n") for line in io.StringIO(text, newline=None)]

    result = _plan(lines, config)
    result.ddl = render_blocks(
        result.blocks, result.sorted_tables, keep_preamble=config.keep_preamble
    )
    result.tables_written = sum(1 for t in result.sorted_tables if t in result.blocks)
    return result


def process_sql(
    input_path: str,
    output_path: Optional[str] = None,
    config: Optional[ReorderConfig] = None,
) -> ReorderResult:
    """
    Reorder the DDL file at input_path and write it to output_path.

    output_path falls back to config.output_path ("output.sql").
    """
    config = config or ReorderConfig()
    output_path = output_path or config.output_path

    lines = read_lines(input_path, encoding=config.encoding)
    result = _plan(lines, config)

    result.tables_written = write_blocks(
        output_path,
        result.blocks,
        result.sorted_tables,
        keep_preamble=config.keep_preamble,
        encoding=config.encoding,
    )
    result.output_path = str(output_path)
    logger.info("Wrote %d table(s) to %s", result.tables_written, output_path)
    return result

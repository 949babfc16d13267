"""
DDL Reorder

Reorders SQL CREATE TABLE statements so that every table is created after
the tables its foreign keys reference.

Modules:
- extractor: Foreign-key dependency graph from DDL text (regex based, no SQL parsing)
- sorter: Kahn's algorithm topological sort with cycle detection
- reassembler: Per-table DDL blocks written back in sorted order
- pipeline: extract -> sort -> reassemble, for files or in-memory text
- config: Run options, loadable from YAML
- cli: `ddl-reorder -i schema.sql -o output.sql`
"""

__version__ = "0.1.0"

from .config import ReorderConfig, load_config
from .exceptions import (
    DDLReorderError,
    InputReadError,
    OutputWriteError,
    CyclicDependencyError,
    UnknownTableError,
    ConfigError,
)
from .extractor import DependencyGraph, extract_dependencies, extract_dependencies_from_file
from .sorter import RootOrder, topological_sort, sort_tables
from .reassembler import TableBlocks, split_blocks, render_blocks, write_blocks, reorder_ddl_file
from .pipeline import ReorderResult, reorder_ddl, process_sql

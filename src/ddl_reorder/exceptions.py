"""
DDL Reorder - Errors

Every failure of the reorder pipeline is fatal and surfaces as one of these:
- InputReadError: the DDL source could not be opened or read
- OutputWriteError: the destination could not be created or written
- CyclicDependencyError: foreign keys form a cycle, no valid order exists
- UnknownTableError: a foreign key names a table the source never creates
- ConfigError: the configuration file is unreadable or invalid
"""

from typing import Dict, List, Optional


class DDLReorderError(Exception):
    """Base class for all reorder failures."""


class InputReadError(DDLReorderError):
    """Raised when the input DDL file cannot be opened or read."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Could not read input file {path}{detail}")


class OutputWriteError(DDLReorderError):
    """Raised when the output DDL file cannot be created or written."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Could not write output file {path}{detail}")


class CyclicDependencyError(DDLReorderError):
    """Raised when the foreign-key graph is not a DAG."""

    def __init__(self, tables: List[str]):
        self.tables = tables
        super().__init__(
            "Cyclic foreign key dependency detected among tables: "
            + ", ".join(tables)
        )


class UnknownTableError(DDLReorderError):
    """Raised when a foreign key references a table the source never creates."""

    def __init__(self, references: Dict[str, List[str]]):
        self.references = references
        parts = [
            f"{parent} (referenced by {', '.join(children)})"
            for parent, children in references.items()
        ]
        super().__init__("Foreign keys reference undeclared tables: " + "; ".join(parts))


class ConfigError(DDLReorderError):
    """Raised for an unreadable or invalid configuration file."""

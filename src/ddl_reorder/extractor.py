"""
DDL Reorder - Dependency Extractor

Scans DDL text line by line and builds the foreign-key dependency graph:
- CREATE TABLE lines open a new "current table"
- FOREIGN KEY ... REFERENCES lines add an edge parent -> current table
- In-degree counts one per declared foreign key (not per distinct parent)
- Appearance order of CREATE TABLE statements is kept for diagnostics

No SQL parsing happens here. Detection is regex based and tolerant of
quoted identifiers (`name`, "name", [name]) and IF NOT EXISTS.

Every foreign key counts, as declared:
- A table referencing itself gets an edge to itself and fails as a cycle,
  unless self references are allowed (then no edge is added)
- A reference to a table the source never creates raises UnknownTableError,
  unless external references are allowed (then the edge is dropped)
- Column-level REFERENCES without FOREIGN KEY can be opted into
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .exceptions import InputReadError, UnknownTableError

logger = logging.getLogger(__name__)


QUOTE_OPEN = r"[`\"\[]?"
QUOTE_CLOSE = r"[`\"\]]?"

TABLE_PATTERN = re.compile(
    r"CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?"
    + QUOTE_OPEN + r"(\w+)" + QUOTE_CLOSE,
    re.IGNORECASE,
)
REFERENCES_PATTERN = re.compile(
    r"REFERENCES\s+" + QUOTE_OPEN + r"(\w+)" + QUOTE_CLOSE,
    re.IGNORECASE,
)
FOREIGN_KEY_MARKER = "foreign key"


@dataclass
class DependencyGraph:
    """Result of one extraction pass over a DDL source."""
    graph: Dict[str, List[str]]  # parent -> dependents, one entry per foreign key
    in_degree: Dict[str, int]    # table -> number of foreign keys it declares
    table_order: List[str]       # every CREATE TABLE occurrence, in source order
    self_references: List[str] = field(default_factory=list)
    external_references: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def tables(self) -> List[str]:
        """Declared tables, each once, in first-appearance order."""
        return list(dict.fromkeys(self.table_order))

    def edge_count(self) -> int:
        return sum(len(children) for children in self.graph.values())


def match_create_table(line: str) -> Optional[str]:
    """Return the table name if the line holds a CREATE TABLE statement."""
    match = TABLE_PATTERN.search(line)
    return match.group(1) if match else None


def match_reference(line: str, inline: bool = False) -> Optional[str]:
    """
    Return the referenced (parent) table name for a foreign key line.

    Only lines mentioning FOREIGN KEY qualify unless inline is set, in which
    case column-level `REFERENCES parent(col)` clauses count too. The first
    REFERENCES on the line wins.
    """
    if not inline and FOREIGN_KEY_MARKER not in line.lower():
        return None
    match = REFERENCES_PATTERN.search(line)
    return match.group(1) if match else None


def extract_dependencies(
    lines: Iterable[str],
    inline_references: bool = False,
    allow_self_references: bool = False,
    allow_external_references: bool = False,
) -> DependencyGraph:
    """
    Build the dependency graph and in-degree map from DDL lines.

    Every FOREIGN KEY under a current table adds one edge and one in-degree,
    including a table referencing itself (which the sorter then reports as
    a cycle). A parent that is never created raises UnknownTableError.

    Args:
        lines: DDL source, one line per item (terminators optional)
        inline_references: Also treat column-level REFERENCES as foreign keys
        allow_self_references: Record self references without an ordering edge
        allow_external_references: Drop edges to undeclared parents with a
            warning instead of raising UnknownTableError

    Returns:
        DependencyGraph with graph, in_degree and table_order filled in

    Example:
        >>> deps = extract_dependencies([
        ...     "CREATE TABLE orders (",
        ...     "  FOREIGN KEY (customer_id) REFERENCES customers(id)",
        ...     ");",
        ...     "CREATE TABLE customers (id INT PRIMARY KEY);",
        ... ])
        >>> deps.graph
        {'orders': [], 'customers': ['orders']}
        >>> deps.in_degree
        {'orders': 1, 'customers': 0}
    """
    graph: Dict[str, List[str]] = {}
    in_degree: Dict[str, int] = {}
    table_order: List[str] = []
    self_references: List[str] = []
    current_table: Optional[str] = None

    # Edges whose parent may only be declared further down the file
    pending: List[tuple] = []

    for raw_line in lines:
        line = raw_line.strip()

        table_name = match_create_table(line)
        if table_name:
            current_table = table_name
            if table_name in graph:
                logger.warning("Table %s is declared more than once", table_name)
            table_order.append(table_name)
            graph.setdefault(table_name, [])
            in_degree.setdefault(table_name, 0)

        parent = match_reference(line, inline=inline_references)
        if parent is None:
            continue
        if current_table is None:
            logger.debug("Ignoring reference to %s before any CREATE TABLE", parent)
            continue
        if parent == current_table:
            if parent not in self_references:
                self_references.append(parent)
            if allow_self_references:
                logger.info("Table %s references itself; no ordering edge added", parent)
                continue
        pending.append((parent, current_table))

    external_references: Dict[str, List[str]] = {}
    for parent, child in pending:
        if parent not in graph:
            external_references.setdefault(parent, []).append(child)
            continue
        graph[parent].append(child)
        in_degree[child] += 1

    if external_references:
        if not allow_external_references:
            raise UnknownTableError(external_references)
        for parent, children in external_references.items():
            logger.warning(
                "Table %s is referenced by %s but never created; reference ignored",
                parent, ", ".join(children),
            )

    logger.debug("Tables in source order: %s", table_order)

    return DependencyGraph(
        graph=graph,
        in_degree=in_degree,
        table_order=table_order,
        self_references=self_references,
        external_references=external_references,
    )


def extract_dependencies_from_file(
    path: str,
    encoding: str = "utf-8",
    inline_references: bool = False,
    allow_self_references: bool = False,
    allow_external_references: bool = False,
) -> DependencyGraph:
    """Run extract_dependencies over a DDL file."""
    try:
        with open(path, "r", encoding=encoding) as f:
            return extract_dependencies(
                f,
                inline_references=inline_references,
                allow_self_references=allow_self_references,
                allow_external_references=allow_external_references,
            )
    except (OSError, LookupError, UnicodeDecodeError) as exc:
        raise InputReadError(str(path), exc) from exc


if __name__ == "__main__":
    sample = """
    CREATE TABLE `order_items` (
        id INT PRIMARY KEY,
        order_id INT,
        FOREIGN KEY (order_id) REFERENCES `orders`(id)
    );
    CREATE TABLE orders (
        id INT PRIMARY KEY,
        customer_id INT,
        FOREIGN KEY (customer_id) REFERENCES customers(id)
    );
    CREATE TABLE customers (id INT PRIMARY KEY);
    """

    print("DDL Reorder - Dependency Extractor")
    print("=" * 50)

    deps = extract_dependencies(sample.splitlines())
    for parent, children in deps.graph.items():
        print(f"  {parent} -> {', '.join(children) or '(no dependents)'}")
    print(f"\nIn-degree: {deps.in_degree}")
    print(f"Source order: {deps.table_order}")

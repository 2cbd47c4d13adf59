from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class BulkInsertResult:
    """Outcome of a multi-table bulk insert.

    Tables are inserted independently; ``errors`` holds the failure of each
    table that did not make it, keyed by table name.
    """

    rows_affected: int = 0
    tables: Dict[str, int] = field(default_factory=dict)
    errors: Dict[str, Exception] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def failed_tables(self) -> List[str]:
        return list(self.errors)

"""
CSV export of journalist result sets
"""

from typing import Any, Dict, Iterable, Sequence
import pandas as pd

LEGACY_EXPORT_COLUMNS = ("email",)
EXPORT_COLUMNS = ("first_name", "email")


def to_csv(rows: Iterable[Dict[str, Any]], columns: Sequence[str]) -> str:
    """Rows as CSV with a header line; missing keys become empty cells"""
    frame = pd.DataFrame(list(rows), columns=list(columns))
    return frame.to_csv(index=False)

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

from ..common.constants import AIRTABLE_ID_KEY


def records_to_dataframe(
    records: List[Dict[str, Any]],
    columns: Optional[List[str]] = None,
    include_id: bool = False,
) -> pd.DataFrame:
    """Convert field maps to a DataFrame, one row per record.

    Fields omitted by Airtable become NaN.

    :param records: Field maps as returned by ``find_many``.
    :param columns: Column order to enforce. Columns missing from every record are still created.
    :param include_id: Records carry ``_airtableId``; it becomes the first column even when
        ``records`` is empty.
    """
    df = pd.DataFrame.from_records(records)
    ordered = list(columns) if columns is not None else list(df.columns)
    if include_id:
        ordered = [AIRTABLE_ID_KEY] + [c for c in ordered if c != AIRTABLE_ID_KEY]
    return df.reindex(columns=ordered)

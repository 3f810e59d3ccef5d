"""Chart stage contract.

Enforces the structure of the record set handed to the rendering layer.
"""

import pandas as pd
from starfield.contracts.base import require


def assert_chart_data(df: pd.DataFrame, max_points: int) -> None:
    """Enforce chart stage contract.

    We do NOT validate the astrophysics of the points. We only check
    structural requirements.

    Raises
    ------
    ContractViolation
        If structural requirements are violated
    """
    require(
        isinstance(df, pd.DataFrame),
        f"Chart contract violated: output is {type(df)}, expected DataFrame"
    )

    for col in ("x", "y", "display_color"):
        require(
            col in df.columns,
            f"Chart contract violated: missing required column '{col}'"
        )

    require(
        len(df) <= max_points,
        f"Chart contract violated: got {len(df)} points, limit is {max_points}"
    )

    if len(df) > 0:
        require(
            df["display_color"].str.startswith("#").all(),
            "Chart contract violated: display_color must be hex colors"
        )

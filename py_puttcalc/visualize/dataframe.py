"""Putt trajectory export to pandas DataFrame.

Integration:
    This module is automatically used by the PuttResult.dataframe() method.

Typical Usage:
    ```python
    from py_puttcalc import Calculator, Green, Putt
    from py_puttcalc.visualize.dataframe import putt_result_as_dataframe

    result = Calculator().simulate(Putt(3.0, Green(stimp=9), overrun=0.5))
    df = putt_result_as_dataframe(result)
    print(df[df['y'] > 3.0].head())
    df.to_csv('putt.csv')
    ```

Dependencies:
    This module requires pandas as an optional dependency. Install via:
    pip install py_puttcalc[charts]
"""

# pylint: skip-file
import warnings

from py_puttcalc.trajectory_data import PUTT_STATE_COLUMNS, PuttResult

try:
    from pandas import DataFrame
except ImportError as error:
    warnings.warn("Install pandas to convert trajectory to pandas.DataFrame", UserWarning)
    raise error

__all__ = (
    'putt_result_as_dataframe',
)


def putt_result_as_dataframe(putt_result: PuttResult, formatted: bool = False) -> DataFrame:
    """Convert PuttResult trajectory samples to a pandas DataFrame.

    Args:
        putt_result: Computed trajectory.
        formatted: False for floats in PreferredUnits; True for strings with unit symbols.

    Returns:
        DataFrame with columns time, x, y, velocity_x, velocity_y, speed and a boolean
        `captured` column marking the crossing sample of a captured putt.
    """
    if formatted:
        rows = [state.formatted() for state in putt_result]
    else:
        rows = [state.in_def_units() for state in putt_result]
    df = DataFrame(rows, columns=list(PUTT_STATE_COLUMNS))
    df['captured'] = [i == putt_result.captured_index for i in range(len(putt_result))]
    return df

# pylint: skip-file

from .dataframe import (
    putt_result_as_dataframe,
)

__all__ = (
    'putt_result_as_dataframe',
)

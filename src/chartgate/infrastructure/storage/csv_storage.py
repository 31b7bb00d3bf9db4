from pathlib import Path
from typing import Sequence, Union

import pandas as pd
from pandas import DataFrame

from ...exceptions.storage import FileStorageError
from ...models.fetch_request import Interval
from ...models.price_bar import CSV_COLUMNS, PriceBar
from ...utils.logging_utils import LoggingConfiguration, LoggingContext
from ...utils.utils import create_full_path

DATE_INDEX_NAME = CSV_COLUMNS[0]
VALUE_COLUMNS = list(CSV_COLUMNS[1:])
DAILY_DATE_FORMAT = "%Y-%m-%d"
INTRADAY_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def bars_to_dataframe(bars: Sequence[PriceBar]) -> DataFrame:
    """Bars as a DataFrame indexed by Date.

    Columns keep object dtype so prices stay Decimal, volumes stay int and
    missing values stay None instead of becoming NaN floats.
    """
    index = pd.DatetimeIndex([bar.date for bar in bars], name=DATE_INDEX_NAME)
    rows = [[bar.as_dict()[column] for column in VALUE_COLUMNS] for bar in bars]
    return DataFrame(rows, index=index, columns=VALUE_COLUMNS, dtype=object)


class CsvBarWriter:
    def __init__(self, interval: Union[Interval, str] = Interval.Daily):
        self.interval = Interval.parse(interval)

    @property
    def date_format(self) -> str:
        return INTRADAY_DATE_FORMAT if self.interval.is_intraday else DAILY_DATE_FORMAT

    def write(self, bars: Sequence[PriceBar], file_path: Union[str, Path]) -> Path:
        file_path = Path(file_path)
        df = bars_to_dataframe(bars)
        df.index = df.index.strftime(self.date_format)
        df.index.name = DATE_INDEX_NAME

        config = LoggingConfiguration(
            entry_msg=f"Saving {len(df)} bars to '{file_path}'",
            success_msg=f"Saved {len(df)} bars to '{file_path}'",
            failure_msg=f"Failed to save bars to '{file_path}'",
        )
        try:
            with LoggingContext(config):
                create_full_path(str(file_path))
                df.to_csv(file_path, na_rep="", lineterminator="\n")
        except OSError as e:
            raise FileStorageError("write", file_path, str(e)) from e
        return file_path

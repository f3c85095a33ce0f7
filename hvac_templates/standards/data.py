"""Tables with the requirements of the energy codes.

Each table is a csv-file in `hvac_templates/data` that is read with pandas
the first time it is needed:

- water_heaters: efficiency metrics of water heaters by template, fuel type
  and heating capacity (Btu/hr).
- motors: minimum full load efficiency of motors by template, number of
  poles, enclosure type and nameplate horsepower.
- space_types: service water heating and exhaust fan data by template,
  building type and space type.

A table can be replaced or extended at run-time with
`StandardsData.register()`.
"""
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from hvac_templates.logging import ModuleLogger

logger = ModuleLogger.get_logger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / 'data'


class StandardsData:
    files: dict[str, Path] = {
        'water_heaters': DATA_DIR / 'water_heaters.csv',
        'motors': DATA_DIR / 'motors.csv',
        'space_types': DATA_DIR / 'space_types.csv'
    }
    _tables: dict[str, pd.DataFrame] = {}

    @classmethod
    def table(cls, name: str) -> pd.DataFrame:
        """Returns the table `name`. Raises `KeyError` if there is no table
        with this name.
        """
        if name not in cls._tables:
            cls._tables[name] = pd.read_csv(cls.files[name])
        return cls._tables[name]

    @classmethod
    def register(cls, name: str, file_path: Path | str, replace: bool = False) -> int:
        """Reads the rows in the csv-file at `file_path` into table `name`.

        If `replace` is True, or if the table doesn't exist yet, the file
        becomes the table. Otherwise the rows are put in front of the
        existing rows, so that `find_object()` finds them first. Returns the
        number of rows that were read.
        """
        new = pd.read_csv(file_path)
        if replace or name not in cls.files:
            cls._tables[name] = new
            cls.files.setdefault(name, Path(file_path))
        else:
            cls._tables[name] = pd.concat([new, cls.table(name)], ignore_index=True)
        logger.info(f"Registered {len(new)} rows in table '{name}' from '{file_path}'.")
        return len(new)

    @classmethod
    def reset(cls) -> None:
        """Forgets all registered rows; the shipped tables are read again
        when they are needed.
        """
        cls._tables = {}
        cls.files = {
            'water_heaters': DATA_DIR / 'water_heaters.csv',
            'motors': DATA_DIR / 'motors.csv',
            'space_types': DATA_DIR / 'space_types.csv'
        }

    @classmethod
    def find_objects(
        cls,
        table_name: str,
        criteria: dict[str, Any],
        capacity: float | None = None
    ) -> pd.DataFrame:
        """Returns the rows of table `table_name` that match all `criteria`
        (column name -> value). If `capacity` is given, only the rows with
        `minimum_capacity <= capacity <= maximum_capacity` are kept.
        """
        df = cls.table(table_name)
        mask = np.ones(len(df), dtype=bool)
        for column, value in criteria.items():
            if column not in df.columns:
                logger.warning(f"Table '{table_name}' has no column '{column}'.")
                return df.iloc[0:0]
            mask &= (df[column] == value).to_numpy()
        if capacity is not None:
            lower = df['minimum_capacity'].to_numpy(dtype=float)
            upper = df['maximum_capacity'].to_numpy(dtype=float)
            mask &= (lower <= capacity) & (capacity <= upper)
        return df[mask]

    @classmethod
    def find_object(
        cls,
        table_name: str,
        criteria: dict[str, Any],
        capacity: float | None = None
    ) -> dict[str, Any] | None:
        """Returns the first row of table `table_name` that matches
        `criteria` and `capacity` (see `find_objects()`) as a dict, or None if
        no row matches. Empty cells are returned as None.
        """
        matches = cls.find_objects(table_name, criteria, capacity)
        if matches.empty:
            logger.debug(
                f"No row in table '{table_name}' matches {criteria}"
                + (f" at capacity {capacity:.1f}." if capacity is not None else ".")
            )
            return None
        row = matches.iloc[0].to_dict()
        return {k: (None if pd.isna(v) else v) for k, v in row.items()}

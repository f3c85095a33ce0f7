"""Performance curves used by the DX coils, heat pumps, cooling towers and
refrigerated cases.

The coefficient sets are kept in a csv-file (`hvac_templates/data/curves.csv`)
that is read with pandas. Each row holds the name of the curve, its form, up
to ten coefficients and the limits of the independent variables and of the
curve output. Users can add their own curves with `CurveLibrary.register()`.
"""
from pathlib import Path

import pandas as pd
import openstudio

from hvac_templates.logging import ModuleLogger

logger = ModuleLogger.get_logger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / 'data'


# curve form -> (OpenStudio class, coefficient setters in column order)
CURVE_FORMS: dict[str, tuple[str, tuple[str, ...]]] = {
    'Linear': (
        'CurveLinear',
        ('setCoefficient1Constant', 'setCoefficient2x')
    ),
    'Quadratic': (
        'CurveQuadratic',
        ('setCoefficient1Constant', 'setCoefficient2x', 'setCoefficient3xPOW2')
    ),
    'Cubic': (
        'CurveCubic',
        ('setCoefficient1Constant', 'setCoefficient2x', 'setCoefficient3xPOW2',
         'setCoefficient4xPOW3')
    ),
    'Biquadratic': (
        'CurveBiquadratic',
        ('setCoefficient1Constant', 'setCoefficient2x', 'setCoefficient3xPOW2',
         'setCoefficient4y', 'setCoefficient5yPOW2', 'setCoefficient6xTIMESY')
    ),
    'Bicubic': (
        'CurveBicubic',
        ('setCoefficient1Constant', 'setCoefficient2x', 'setCoefficient3xPOW2',
         'setCoefficient4y', 'setCoefficient5yPOW2', 'setCoefficient6xTIMESY',
         'setCoefficient7xPOW3', 'setCoefficient8yPOW3',
         'setCoefficient9xPOW2TIMESY', 'setCoefficient10xTIMESYPOW2')
    ),
    'QuadLinear': (
        'CurveQuadLinear',
        ('setCoefficient1Constant', 'setCoefficient2w', 'setCoefficient3x',
         'setCoefficient4y', 'setCoefficient5z')
    ),
    'QuintLinear': (
        'CurveQuintLinear',
        ('setCoefficient1Constant', 'setCoefficient2v', 'setCoefficient3w',
         'setCoefficient4x', 'setCoefficient5y', 'setCoefficient6z')
    )
}

# forms with a second independent variable named y
TWO_VARIABLE_FORMS = ('Biquadratic', 'Bicubic')


class CurveLibrary:
    """Class for storing curve coefficient sets at run-time and reading user
    defined curves from file.
    """
    default_file: Path = DATA_DIR / 'curves.csv'
    _table: pd.DataFrame | None = None

    @classmethod
    def _read(cls, file_path: Path | str) -> pd.DataFrame:
        df = pd.read_csv(file_path)
        df['name'] = df['name'].str.strip()
        return df.set_index('name')

    @classmethod
    def table(cls) -> pd.DataFrame:
        if cls._table is None:
            cls._table = cls._read(cls.default_file)
        return cls._table

    @classmethod
    def register(cls, file_path: Path | str) -> list[str]:
        """Adds the curves in the csv-file at `file_path` to the library.
        Curves with a name already in the library replace the existing ones.
        Returns the names of the curves that were read.
        """
        new = cls._read(file_path)
        table = cls.table()
        table = table[~table.index.isin(new.index)]
        cls._table = pd.concat([table, new])
        names = list(new.index)
        logger.info(f"Registered curves {names} from '{file_path}'.")
        return names

    @classmethod
    def reset(cls) -> None:
        cls._table = None

    @classmethod
    def names(cls) -> list[str]:
        return list(cls.table().index)

    @classmethod
    def get(cls, key: str) -> dict | None:
        """Returns the data row of the curve with name `key` as a dict, or
        None if the library doesn't have it.
        """
        table = cls.table()
        if key not in table.index:
            return None
        row = table.loc[key].to_dict()
        row['name'] = key
        return row


def _existing_curves(model: openstudio.model.Model) -> list:
    curves = []
    curves += model.getCurveLinears()
    curves += model.getCurveQuadratics()
    curves += model.getCurveCubics()
    curves += model.getCurveBiquadratics()
    curves += model.getCurveBicubics()
    curves += model.getCurveQuadLinears()
    curves += model.getCurveQuintLinears()
    return curves


def create_curve(
    model: openstudio.model.Model,
    key: str,
    name: str | None = None
) -> openstudio.model.Curve | None:
    """Builds a new curve from the library row `key` and adds it to `model`.

    Parameters
    ----------
    model:
        The building model.
    key:
        Name of the curve in `CurveLibrary`.
    name:
        Name given to the new curve object. Defaults to `key`. OpenStudio
        makes the name unique if the model already has an object with the
        same name.

    Returns
    -------
    The new curve, or None if `key` is not in the library or its form is
    not supported.
    """
    data = CurveLibrary.get(key)
    if data is None:
        logger.error(f"Cannot find a curve called '{key}'.")
        return None
    form = data['form']
    if form not in CURVE_FORMS:
        logger.error(f"Curve '{key}' has an invalid form '{form}'.")
        return None

    class_name, setters = CURVE_FORMS[form]
    curve = getattr(openstudio.model, class_name)(model)
    curve.setName(name or key)
    for i, setter in enumerate(setters, start=1):
        value = data[f'coeff_{i}']
        if not pd.isna(value):
            getattr(curve, setter)(float(value))

    if not pd.isna(data['min_x']):
        curve.setMinimumValueofx(float(data['min_x']))
    if not pd.isna(data['max_x']):
        curve.setMaximumValueofx(float(data['max_x']))
    if form in TWO_VARIABLE_FORMS:
        if not pd.isna(data['min_y']):
            curve.setMinimumValueofy(float(data['min_y']))
        if not pd.isna(data['max_y']):
            curve.setMaximumValueofy(float(data['max_y']))
    if not pd.isna(data['min_output']):
        curve.setMinimumCurveOutput(float(data['min_output']))
    if not pd.isna(data['max_output']):
        curve.setMaximumCurveOutput(float(data['max_output']))
    return curve


def add_curve(model: openstudio.model.Model, name: str) -> openstudio.model.Curve | None:
    """Returns the curve called `name` from `model`. If the model doesn't
    have it yet, it is built from the library.
    """
    for curve in _existing_curves(model):
        if curve.nameString() == name:
            logger.debug(f"Curve '{name}' already in the model.")
            return curve
    return create_curve(model, name)

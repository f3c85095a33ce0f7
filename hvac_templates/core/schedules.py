"""Schedules used by the builders.

Constant schedules are generated on the fly. Named schedules (operation
schedules, setpoint schedules, end-use fraction schedules) are kept in a
library that is read from csv-files with pandas. The package ships a default
library in `hvac_templates/data/schedules.csv`; other libraries can be added
at run-time with `ScheduleLibrary.register()`.
"""
from pathlib import Path
from datetime import datetime

import pandas as pd
import openstudio

from hvac_templates.logging import ModuleLogger

logger = ModuleLogger.get_logger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / 'data'

WEEKDAYS = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri')
WEEKEND = ('Sat', 'Sun')


def _get_schedule_by_name(model: openstudio.model.Model, name: str):
    for schedule in model.getSchedules():
        if schedule.nameString() == name:
            return schedule
    return None


def add_temperature_type_limits(model: openstudio.model.Model) -> openstudio.model.ScheduleTypeLimits:
    """Returns the schedule type limits for temperature schedules, creating
    them if the model doesn't have them yet.
    """
    name = 'Temperature Schedule Type Limits'
    existing = model.getScheduleTypeLimitsByName(name)
    if existing.is_initialized():
        return existing.get()
    type_limits = openstudio.model.ScheduleTypeLimits(model)
    type_limits.setName(name)
    type_limits.setLowerLimitValue(0.0)
    type_limits.setUpperLimitValue(100.0)
    type_limits.setNumericType('Continuous')
    type_limits.setUnitType('Temperature')
    return type_limits


def add_constant_schedule_ruleset(
    model: openstudio.model.Model,
    value: float,
    name: str,
    type_limits: openstudio.model.ScheduleTypeLimits | None = None
) -> openstudio.model.ScheduleRuleset:
    """Returns a schedule ruleset with `name` that holds `value` all day long.
    If the model already contains a ruleset with this name and this single
    value, that ruleset is returned.
    """
    existing = model.getScheduleRulesetByName(name)
    if existing.is_initialized():
        existing = existing.get()
        values = existing.defaultDaySchedule().values()
        if len(values) == 1 and abs(values[0] - value) < 1.0e-6:
            return existing
    schedule = openstudio.model.ScheduleRuleset(model)
    schedule.setName(name)
    schedule.defaultDaySchedule().setName(f"{name} Default")
    schedule.defaultDaySchedule().addValue(openstudio.Time(0, 24, 0, 0), value)
    if type_limits is not None:
        schedule.setScheduleTypeLimits(type_limits)
    return schedule


def add_always_off_schedule(model: openstudio.model.Model) -> openstudio.model.ScheduleRuleset:
    """Returns the ruleset 'ALWAYS_OFF' with value 0 on every day, including
    the design days.
    """
    existing = model.getScheduleRulesetByName('ALWAYS_OFF')
    if existing.is_initialized():
        return existing.get()
    always_off = openstudio.model.ScheduleRuleset(model)
    always_off.setName('ALWAYS_OFF')
    always_off.defaultDaySchedule().setName('ALWAYS_OFF day')
    always_off.defaultDaySchedule().addValue(openstudio.Time(0, 24, 0, 0), 0.0)
    always_off.setSummerDesignDaySchedule(always_off.defaultDaySchedule())
    always_off.setWinterDesignDaySchedule(always_off.defaultDaySchedule())
    return always_off


def add_values_to_day_schedule(
    day_schedule: openstudio.model.ScheduleDay,
    schedule_type: str,
    values: list[float]
) -> None:
    """Writes `values` to `day_schedule`.

    Parameters
    ----------
    day_schedule:
        The day schedule to fill.
    schedule_type:
        'Constant' if `values` holds a single value for the whole day,
        'Hourly' if `values` holds 24 hourly values. Consecutive equal hourly
        values are merged into one time-value pair.
    values:
        The schedule values.
    """
    if schedule_type == 'Constant':
        day_schedule.addValue(openstudio.Time(0, 24, 0, 0), values[0])
    elif schedule_type == 'Hourly':
        for i in range(23):
            if values[i] != values[i + 1]:
                day_schedule.addValue(openstudio.Time(0, i + 1, 0, 0), values[i])
        day_schedule.addValue(openstudio.Time(0, 24, 0, 0), values[23])
    else:
        logger.error(
            f"Schedule type '{schedule_type}' of day schedule "
            f"'{day_schedule.nameString()}' is not supported."
        )


def _parse_date(s: str) -> openstudio.Date:
    d = datetime.strptime(s.strip(), '%m/%d')
    return openstudio.Date(openstudio.MonthOfYear(d.month), d.day)


class ScheduleLibrary:
    """Class for storing named schedules at run-time and reading user defined
    schedules from file.

    Each row of a schedule file is one rule of a schedule and has the columns:
    - name: name of the schedule the rule belongs to
    - category: free text (e.g. 'Operation', 'Setpoint', 'Fraction')
    - day_types: the days the rule applies to, separated by '|'. Valid day
      types are 'Default', 'WntrDsn', 'SmrDsn', 'Wkdy', 'Wknd', 'Mon' to
      'Sun' and 'Hol'.
    - start_date, end_date: period the rule applies to, as 'mm/dd'
    - type: 'Constant' or 'Hourly'
    - values: the schedule values separated by spaces
    """
    default_file: Path = DATA_DIR / 'schedules.csv'
    _table: pd.DataFrame | None = None

    @classmethod
    def _read(cls, file_path: Path | str) -> pd.DataFrame:
        df = pd.read_csv(file_path, dtype={'start_date': str, 'end_date': str})
        df['name'] = df['name'].str.strip()
        return df

    @classmethod
    def table(cls) -> pd.DataFrame:
        if cls._table is None:
            cls._table = cls._read(cls.default_file)
        return cls._table

    @classmethod
    def register(cls, file_path: Path | str) -> list[str]:
        """Adds the schedules in the csv-file at `file_path` to the library.
        Schedules with a name already in the library replace the existing
        ones. Returns the names of the schedules that were read.
        """
        new = cls._read(file_path)
        table = cls.table()
        table = table[~table['name'].isin(new['name'])]
        cls._table = pd.concat([table, new], ignore_index=True)
        names = list(new['name'].unique())
        logger.info(f"Registered schedules {names} from '{file_path}'.")
        return names

    @classmethod
    def reset(cls) -> None:
        """Restores the default library."""
        cls._table = None

    @classmethod
    def names(cls) -> list[str]:
        return list(cls.table()['name'].unique())

    @classmethod
    def rules(cls, name: str) -> list[dict]:
        table = cls.table()
        return table[table['name'] == name].to_dict('records')

    @classmethod
    def add_schedule(
        cls,
        model: openstudio.model.Model,
        name: str | None
    ) -> openstudio.model.Schedule:
        """Returns the schedule with `name`. If the model already has a
        schedule with this name, this schedule is returned. Otherwise, the
        schedule is built from the library rules. If `name` is None, the
        always-on schedule of the model is returned. If `name` is not in the
        library, an error is logged and the always-on schedule is returned.
        """
        if name is None:
            return model.alwaysOnDiscreteSchedule()
        existing = _get_schedule_by_name(model, name)
        if existing is not None:
            return existing
        rules = cls.rules(name)
        if not rules:
            logger.error(
                f"Cannot find data for schedule '{name}'; "
                f"the always-on schedule is used instead."
            )
            return model.alwaysOnDiscreteSchedule()

        sch_ruleset = openstudio.model.ScheduleRuleset(model)
        sch_ruleset.setName(name)
        for rule in rules:
            day_types = [d.strip() for d in rule['day_types'].split('|')]
            sch_type = rule['type']
            values = [float(v) for v in str(rule['values']).split()]

            if 'Default' in day_types:
                day_sch = sch_ruleset.defaultDaySchedule()
                day_sch.setName(f"{name} Default")
                add_values_to_day_schedule(day_sch, sch_type, values)

            if 'WntrDsn' in day_types:
                day_sch = openstudio.model.ScheduleDay(model)
                sch_ruleset.setWinterDesignDaySchedule(day_sch)
                day_sch = sch_ruleset.winterDesignDaySchedule()
                day_sch.setName(f"{name} Winter Design Day")
                add_values_to_day_schedule(day_sch, sch_type, values)

            if 'SmrDsn' in day_types:
                day_sch = openstudio.model.ScheduleDay(model)
                sch_ruleset.setSummerDesignDaySchedule(day_sch)
                day_sch = sch_ruleset.summerDesignDaySchedule()
                day_sch.setName(f"{name} Summer Design Day")
                add_values_to_day_schedule(day_sch, sch_type, values)

            week_days = set(day_types) & set(('Wkdy', 'Wknd') + WEEKDAYS + WEEKEND)
            if week_days:
                sch_rule = openstudio.model.ScheduleRule(sch_ruleset)
                day_sch = sch_rule.daySchedule()
                day_sch.setName(f"{name} {'|'.join(day_types)} Day")
                add_values_to_day_schedule(day_sch, sch_type, values)
                sch_rule.setStartDate(_parse_date(rule['start_date']))
                sch_rule.setEndDate(_parse_date(rule['end_date']))
                applies = set()
                if 'Wkdy' in day_types:
                    applies.update(WEEKDAYS)
                if 'Wknd' in day_types:
                    applies.update(WEEKEND)
                applies.update(d for d in day_types if d in WEEKDAYS + WEEKEND)
                setters = {
                    'Mon': sch_rule.setApplyMonday,
                    'Tue': sch_rule.setApplyTuesday,
                    'Wed': sch_rule.setApplyWednesday,
                    'Thu': sch_rule.setApplyThursday,
                    'Fri': sch_rule.setApplyFriday,
                    'Sat': sch_rule.setApplySaturday,
                    'Sun': sch_rule.setApplySunday
                }
                for day in applies:
                    setters[day](True)
        return sch_ruleset


def add_schedule(model: openstudio.model.Model, name: str | None) -> openstudio.model.Schedule:
    """Shortcut for `ScheduleLibrary.add_schedule()`."""
    return ScheduleLibrary.add_schedule(model, name)

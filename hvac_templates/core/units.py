"""Unit conversions between the IP values in which the code tables are
written and the SI values the building model works with.
"""
from hvac_templates import Quantity

Q_ = Quantity


def to_si(value: float | Quantity, unit: str) -> float:
    """Returns the magnitude of `value` in `unit`. A plain number is taken to
    be already expressed in `unit`.
    """
    if isinstance(value, Quantity):
        return value.to(unit).m
    return float(value)


def f_to_c(T_f: float) -> float:
    """Converts a temperature in degrees Fahrenheit to degrees Celsius."""
    return Q_(T_f, 'degF').to('degC').m


def c_to_f(T_c: float) -> float:
    """Converts a temperature in degrees Celsius to degrees Fahrenheit."""
    return Q_(T_c, 'degC').to('degF').m


def delta_f_to_k(dT_r: float) -> float:
    """Converts a temperature difference in Rankine to Kelvin."""
    return Q_(dT_r, 'delta_degF').to('delta_degC').m


def ft_h2o_to_pa(h: float) -> float:
    return Q_(h, 'foot_H2O').to('Pa').m


def in_h2o_to_pa(h: float) -> float:
    return Q_(h, 'inWC').to('Pa').m

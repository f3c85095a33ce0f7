"""Fan efficiency helpers.

OpenStudio stores the total efficiency of a fan and the efficiency of its
motor. The impeller efficiency is their ratio; changing one of the two
component efficiencies changes the total efficiency and preserves the
other component.
"""
import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import Q_, Template, template_name
from .data import StandardsData

logger = ModuleLogger.get_logger(__name__)

BASELINE_IMPELLER_EFFICIENCY = 0.65
# motor efficiency assumed for fans that don't model their motor
EXHAUST_FAN_MOTOR_EFFICIENCY = 0.7
# brake horsepower used when the fan flow rate is unknown
DEFAULT_BRAKE_HORSEPOWER = 0.5

MOTOR_POLES = 4
MOTOR_TYPE = 'Enclosed'


def _motor_efficiency(fan) -> float:
    if fan.to_FanZoneExhaust().is_initialized():
        return EXHAUST_FAN_MOTOR_EFFICIENCY
    return fan.motorEfficiency()


def fan_maximum_flow_rate(fan) -> float | None:
    """Returns the autosized or else the hard-sized maximum flow rate of
    `fan` in m3/s, or None if neither is available.
    """
    if fan.autosizedMaximumFlowRate().is_initialized():
        return fan.autosizedMaximumFlowRate().get()
    if fan.maximumFlowRate().is_initialized():
        return fan.maximumFlowRate().get()
    return None


def fan_baseline_impeller_efficiency(fan, template: str | Template) -> float:
    """Returns the impeller efficiency of a baseline fan."""
    return BASELINE_IMPELLER_EFFICIENCY


def fan_change_impeller_efficiency(fan, impeller_eff: float) -> None:
    """Sets a new impeller efficiency and keeps the motor efficiency."""
    fan.setFanEfficiency(_motor_efficiency(fan) * impeller_eff)


def fan_change_motor_efficiency(fan, motor_eff: float) -> None:
    """Sets a new motor efficiency and keeps the impeller efficiency."""
    impeller_eff = fan.fanEfficiency() / _motor_efficiency(fan)
    fan.setMotorEfficiency(motor_eff)
    fan.setFanEfficiency(impeller_eff * motor_eff)


def fan_brake_horsepower(fan) -> float:
    """Returns the brake horsepower of `fan` at its maximum flow rate:

        bhp = pressure rise (inWC) * flow (cfm) / (6356 * impeller efficiency)

    If the flow rate is not available yet, 0.5 bhp is returned.
    """
    flow_m3_per_s = fan_maximum_flow_rate(fan)
    if flow_m3_per_s is None:
        logger.debug(
            f"For {fan.nameString()}: maximum flow rate is unknown, "
            f"brake horsepower assumed to be {DEFAULT_BRAKE_HORSEPOWER} hp."
        )
        return DEFAULT_BRAKE_HORSEPOWER
    flow_cfm = Q_(flow_m3_per_s, 'm**3/s').to('ft**3/min').m
    pressure_rise_in_h2o = Q_(fan.pressureRise(), 'Pa').to('inWC').m
    impeller_eff = fan.fanEfficiency() / _motor_efficiency(fan)
    return pressure_rise_in_h2o * flow_cfm / (6356 * impeller_eff)


def standard_minimum_motor_efficiency_and_size(
    template: str | Template,
    motor_bhp: float
) -> tuple[float, float] | None:
    """Returns the minimum full load efficiency and the nominal size (hp) of
    the 4-pole enclosed motor that drives a load of `motor_bhp`, or None if
    the `motors` table has no motor for it.
    """
    criteria = {
        'template': template_name(template),
        'number_of_poles': MOTOR_POLES,
        'type': MOTOR_TYPE
    }
    motor = StandardsData.find_object('motors', criteria, motor_bhp)
    if motor is None:
        return None
    nominal_hp = round(float(motor['maximum_capacity']), 1)
    if nominal_hp >= 2:
        nominal_hp = float(round(nominal_hp))
    return float(motor['nominal_full_load_efficiency']), nominal_hp


def fan_apply_standard_minimum_motor_efficiency(
    fan,
    template: str | Template,
    motor_bhp: float
) -> bool:
    """Sets the motor efficiency of `fan` to the minimum efficiency of a
    motor of `motor_bhp` brake horsepower. The impeller efficiency is kept.
    """
    found = standard_minimum_motor_efficiency_and_size(template, motor_bhp)
    if found is None:
        logger.warning(
            f"For {fan.nameString()}: no motor efficiency found for "
            f"{motor_bhp:.2f} bhp in {template_name(template)}."
        )
        return False
    motor_eff, nominal_hp = found
    fan_change_motor_efficiency(fan, motor_eff)
    logger.debug(
        f"For {fan.nameString()}: motor of {nominal_hp} hp, "
        f"efficiency set to {motor_eff:.3f}."
    )
    return True


def fan_apply_prm_baseline_fan_power(
    fan: openstudio.model.ModelObject,
    template: str | Template,
    efficacy_w_per_cfm: float
) -> float | None:
    """Gives `fan` the baseline impeller efficiency and motor, and sets the
    pressure rise that yields `efficacy_w_per_cfm`. Returns the efficacy
    that results from it (W/cfm), or None if the flow rate of the fan is
    not known yet.
    """
    fan_change_impeller_efficiency(fan, fan_baseline_impeller_efficiency(fan, template))
    fan_apply_standard_minimum_motor_efficiency(fan, template, fan_brake_horsepower(fan))

    efficacy_w_per_m3_per_s = Q_(efficacy_w_per_cfm, 'W/(ft**3/min)').to('W/(m**3/s)').m
    fan_tot_eff = fan.fanEfficiency()
    pressure_rise_pa = efficacy_w_per_m3_per_s * fan_tot_eff
    fan.setPressureRise(pressure_rise_pa)

    flow_m3_per_s = fan_maximum_flow_rate(fan)
    if flow_m3_per_s is None:
        return None
    power_w = pressure_rise_pa * flow_m3_per_s / fan_tot_eff
    return power_w / Q_(flow_m3_per_s, 'm**3/s').to('ft**3/min').m

"""Fan power requirements of open cooling towers with propeller or axial
fans.
"""
import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import Q_, Template, template_name
from .fan import standard_minimum_motor_efficiency_and_size

logger = ModuleLogger.get_logger(__name__)

# minimum water flow per fan nameplate horsepower (gpm/hp)
MIN_GPM_PER_HP = 38.2
# fan brake horsepower as a fraction of the nameplate horsepower
BHP_TO_NAMEPLATE = 0.9
# fan laws at half speed
LOW_SPEED_POWER_FRACTION = 1.0 / 8.0


def _design_water_flow_rate(cooling_tower) -> float | None:
    if cooling_tower.designWaterFlowRate().is_initialized():
        return cooling_tower.designWaterFlowRate().get()
    if cooling_tower.autosizedDesignWaterFlowRate().is_initialized():
        return cooling_tower.autosizedDesignWaterFlowRate().get()
    return None


def cooling_tower_apply_minimum_power_per_flow(
    cooling_tower: openstudio.model.ModelObject,
    template: str | Template
) -> bool:
    """Sets the design fan power of a single speed, two speed or variable
    speed cooling tower to the maximum the code allows for its design water
    flow rate.

    The nameplate horsepower follows from the minimum of 38.2 gpm/hp. The
    fan draws 90 % of the nameplate horsepower at the shaft, and the motor
    efficiency is the minimum efficiency of a motor of that size. The low
    speed fan power of a two speed tower is 1/8 of the high speed power.

    Returns False if the design water flow rate is neither hard sized nor
    autosized, or if no motor is found.
    """
    name = cooling_tower.nameString()
    flow_m3_per_s = _design_water_flow_rate(cooling_tower)
    if flow_m3_per_s is None:
        logger.warning(f"For {name}, cannot determine the design water flow rate; fan power is not set.")
        return False
    flow_gpm = Q_(flow_m3_per_s, 'm**3/s').to('gallon/minute').m

    fan_motor_nameplate_hp = flow_gpm / MIN_GPM_PER_HP
    fan_bhp = BHP_TO_NAMEPLATE * fan_motor_nameplate_hp
    found = standard_minimum_motor_efficiency_and_size(template, fan_motor_nameplate_hp)
    if found is None:
        logger.warning(f"For {name}, no fan motor found for {fan_motor_nameplate_hp:.1f} hp.")
        return False
    fan_motor_eff, nominal_hp = found
    fan_power_w = Q_(fan_bhp / fan_motor_eff, 'hp').to('W').m

    idd_type = cooling_tower.iddObjectType().valueName()
    if idd_type == 'OS_CoolingTower_SingleSpeed':
        cooling_tower.setFanPoweratDesignAirFlowRate(fan_power_w)
    elif idd_type == 'OS_CoolingTower_TwoSpeed':
        cooling_tower.setHighFanSpeedFanPower(fan_power_w)
        cooling_tower.setLowFanSpeedFanPower(fan_power_w * LOW_SPEED_POWER_FRACTION)
    elif idd_type == 'OS_CoolingTower_VariableSpeed':
        cooling_tower.setDesignFanPower(fan_power_w)
    else:
        logger.warning(f"For {name}, {idd_type} is not a supported cooling tower type.")
        return False

    logger.info(
        f"For {template_name(template)}: {name}: design water flow = {flow_gpm:.0f} gpm, "
        f"fan motor nameplate = {nominal_hp} hp, fan power = {fan_power_w:.0f} W."
    )
    return True


def cooling_tower_variable_speed_apply_efficiency_and_curves(
    cooling_tower: openstudio.model.CoolingTowerVariableSpeed,
    template: str | Template
) -> bool:
    cooling_tower_apply_minimum_power_per_flow(cooling_tower, template)
    return True

import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import Template, is_doe_ref, add_schedule, apply_zone_sizing

logger = ModuleLogger.get_logger(__name__)

HEATING_TYPES = ('Gas', 'Electric')
UNIT_HEATER_FAN_EFFICIENCY = 0.53625
UNIT_HEATER_FAN_MOTOR_EFFICIENCY = 0.825


def add_unitheater(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    thermal_zones: list[openstudio.model.ThermalZone],
    hvac_op_sch: str | None,
    fan_control_type: str,
    fan_pressure_rise: float,
    heating_type: str,
    building_type: str | None = None
) -> list[openstudio.model.ZoneHVACUnitHeater]:
    """Adds a unit heater with a constant volume fan and a gas or electric
    coil to each zone in `thermal_zones`.

    Parameters
    ----------
    fan_control_type:
        'OnOff' or 'Continuous'.
    fan_pressure_rise:
        Pressure rise of the fan in Pa.
    heating_type:
        'Gas' or 'Electric'.

    Returns
    -------
    The unit heaters, or an empty list if `heating_type` is not recognized.
    """
    if heating_type not in HEATING_TYPES:
        logger.error(
            f"Heating type '{heating_type}' is not recognized when adding unit "
            f"heaters; no unit heaters will be created."
        )
        return []

    hvac_op_sch = add_schedule(model, hvac_op_sch)

    # standalone retail buildings of the code vintages size for colder air
    if building_type == 'RetailStandalone' and not is_doe_ref(standard):
        zone_clg_sa_temp_c = 12.8
    else:
        zone_clg_sa_temp_c = 14.0

    unit_heaters = []
    for zone in thermal_zones:
        zone_name = zone.nameString()
        logger.info(f"Adding unit heater for {zone_name}.")
        apply_zone_sizing(zone, zone_clg_sa_temp_c, 50.0, 0.008, 0.008)

        fan = openstudio.model.FanConstantVolume(model, hvac_op_sch)
        fan.setName(f"{zone_name} UnitHeater Fan")
        fan.setPressureRise(fan_pressure_rise)
        fan.setFanEfficiency(UNIT_HEATER_FAN_EFFICIENCY)
        fan.setMotorEfficiency(UNIT_HEATER_FAN_MOTOR_EFFICIENCY)

        if heating_type == 'Gas':
            htg_coil = openstudio.model.CoilHeatingGas(model, hvac_op_sch)
        else:
            htg_coil = openstudio.model.CoilHeatingElectric(model, hvac_op_sch)
        htg_coil.setName(f"{zone_name} UnitHeater {heating_type} Htg Coil")

        unit_heater = openstudio.model.ZoneHVACUnitHeater(model, hvac_op_sch, fan, htg_coil)
        unit_heater.setName(f"{zone_name} UnitHeater")
        unit_heater.setFanControlType(fan_control_type)
        unit_heater.addToThermalZone(zone)
        unit_heaters.append(unit_heater)

    return unit_heaters

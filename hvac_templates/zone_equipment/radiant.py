import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import Template

logger = ModuleLogger.get_logger(__name__)

# heating type -> fuel type of ZoneHVAC:HighTemperatureRadiant
FUEL_TYPES = {
    'Gas': 'NaturalGas',
    'NaturalGas': 'NaturalGas',
    'Electric': 'Electricity',
    'Electricity': 'Electricity'
}
TEMPERATURE_CONTROL_TYPE = 'MeanAirTemperature'
RADIANT_FRACTION = 0.8
HEATING_THROTTLING_RANGE = 2.0      # K


def add_high_temp_radiant(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    thermal_zones: list[openstudio.model.ThermalZone],
    heating_type: str,
    combustion_efficiency: float,
    building_type: str | None = None
) -> list[openstudio.model.ZoneHVACHighTemperatureRadiant]:
    """Adds a high temperature radiant heater to each zone in
    `thermal_zones`. The heaters control on the mean air temperature of the
    zone and convert 80 % of their input into radiant energy.

    Returns an empty list if `heating_type` is not 'Gas' or 'Electric'.
    """
    fuel_type = FUEL_TYPES.get(heating_type)
    if fuel_type is None:
        logger.error(f"Heating type '{heating_type}' is not recognized, no radiant heaters added.")
        return []

    rad_heaters = []
    for zone in thermal_zones:
        zone_name = zone.nameString()
        logger.info(f"Adding high temperature radiant heater for {zone_name}.")
        high_temp_radiant = openstudio.model.ZoneHVACHighTemperatureRadiant(model)
        high_temp_radiant.setName(f"{zone_name} High Temp Radiant")
        high_temp_radiant.setFuelType(fuel_type)
        high_temp_radiant.setCombustionEfficiency(combustion_efficiency)
        high_temp_radiant.setTemperatureControlType(TEMPERATURE_CONTROL_TYPE)
        high_temp_radiant.setFractionofInputConvertedtoRadiantEnergy(RADIANT_FRACTION)
        high_temp_radiant.setHeatingThrottlingRange(HEATING_THROTTLING_RANGE)
        high_temp_radiant.addToThermalZone(zone)
        rad_heaters.append(high_temp_radiant)
    return rad_heaters

"""Packaged terminal air conditioners and heat pumps, one per zone."""
import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import (
    Template,
    f_to_c,
    in_h2o_to_pa,
    add_always_off_schedule,
    apply_zone_sizing,
    add_water_heating_coil,
    add_dx_cooling_coil_single_speed,
    add_dx_cooling_coil_two_speed,
    add_hp_heating_coil
)
from hvac_templates.air_systems.common import PREHEAT_SA_TEMP_F, hot_water_conditions

logger = ModuleLogger.get_logger(__name__)

FAN_TYPES = ('ConstantVolume', 'Cycling')
PTAC_HEATING_TYPES = ('Gas', 'Electric', 'Water')
PTAC_COOLING_TYPES = ('Two Speed DX AC', 'Single Speed DX AC')

PTAC_FAN_PRESSURE_RISE_IN_H2O = 1.33
PTAC_FAN_EFFICIENCY = 0.52
PTAC_FAN_MOTOR_EFFICIENCY = 0.8
ZONE_CLG_SA_TEMP_C = 14.0
ZONE_HTG_SA_TEMP_C = 50.0
ZONE_SA_HUMIDITY_RATIO = 0.008


def _add_ptac_fan(model: openstudio.model.Model, zone_name: str, fan_type: str):
    always_on = model.alwaysOnDiscreteSchedule()
    if fan_type == 'ConstantVolume':
        fan = openstudio.model.FanConstantVolume(model, always_on)
    else:
        fan = openstudio.model.FanOnOff(model, always_on)
    fan.setName(f"{zone_name} PTAC Fan")
    fan.setPressureRise(in_h2o_to_pa(PTAC_FAN_PRESSURE_RISE_IN_H2O))
    fan.setFanEfficiency(PTAC_FAN_EFFICIENCY)
    fan.setMotorEfficiency(PTAC_FAN_MOTOR_EFFICIENCY)
    return fan


def _set_fan_operating_mode(model: openstudio.model.Model, unit, fan_type: str) -> None:
    # cycling fans run only while the unit heats or cools
    if fan_type == 'ConstantVolume':
        unit.setSupplyAirFanOperatingModeSchedule(model.alwaysOnDiscreteSchedule())
    else:
        unit.setSupplyAirFanOperatingModeSchedule(add_always_off_schedule(model))


def _size_zone(zone: openstudio.model.ThermalZone) -> None:
    apply_zone_sizing(
        zone,
        ZONE_CLG_SA_TEMP_C,
        ZONE_HTG_SA_TEMP_C,
        ZONE_SA_HUMIDITY_RATIO,
        ZONE_SA_HUMIDITY_RATIO
    )


def add_ptac(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    hot_water_loop: openstudio.model.PlantLoop | None,
    thermal_zones: list[openstudio.model.ThermalZone],
    fan_type: str,
    heating_type: str,
    cooling_type: str,
    building_type: str | None = None
) -> list[openstudio.model.ZoneHVACPackagedTerminalAirConditioner]:
    """Adds a packaged terminal air conditioner with a draw-through fan to
    each zone in `thermal_zones`.

    Parameters
    ----------
    fan_type:
        'ConstantVolume' or 'Cycling'.
    heating_type:
        'Gas', 'Electric' or 'Water'. Water coils need `hot_water_loop`.
    cooling_type:
        'Two Speed DX AC' or 'Single Speed DX AC'.

    Returns
    -------
    The PTACs, or an empty list if a selection is not recognized or the hot
    water loop is missing.
    """
    checks = (
        (fan_type, FAN_TYPES, 'PTAC fan type'),
        (heating_type, PTAC_HEATING_TYPES, 'PTAC heating type'),
        (cooling_type, PTAC_COOLING_TYPES, 'PTAC cooling type')
    )
    for value, valid, what in checks:
        if value not in valid:
            logger.error(f"{what} '{value}' is not recognized, no PTACs added.")
            return []
    if heating_type == 'Water' and hot_water_loop is None:
        logger.error('No hot water plant loop supplied, no PTACs added.')
        return []

    always_on = model.alwaysOnDiscreteSchedule()
    ptacs = []
    for zone in thermal_zones:
        zone_name = zone.nameString()
        logger.info(f"Adding PTAC for {zone_name}.")
        _size_zone(zone)

        fan = _add_ptac_fan(model, zone_name, fan_type)

        if heating_type == 'Gas':
            htg_coil = openstudio.model.CoilHeatingGas(model, always_on)
            htg_coil.setName(f"{zone_name} PTAC Gas Htg Coil")
        elif heating_type == 'Electric':
            htg_coil = openstudio.model.CoilHeatingElectric(model, always_on)
            htg_coil.setName(f"{zone_name} PTAC Electric Htg Coil")
        else:
            hw_temp_c, hw_delta_t_k = hot_water_conditions()
            htg_coil = add_water_heating_coil(
                model, f"{zone_name} PTAC Water Htg Coil", hot_water_loop,
                hw_temp_c, hw_delta_t_k, f_to_c(PREHEAT_SA_TEMP_F), ZONE_HTG_SA_TEMP_C
            )

        if cooling_type == 'Two Speed DX AC':
            clg_coil = add_dx_cooling_coil_two_speed(model, f"{zone_name} PTAC 2spd DX AC Clg Coil")
        else:
            clg_coil = add_dx_cooling_coil_single_speed(
                model, f"{zone_name} PTAC 1spd DX AC Clg Coil", 'PTAC DX Clg'
            )

        ptac = openstudio.model.ZoneHVACPackagedTerminalAirConditioner(
            model, always_on, fan, htg_coil, clg_coil
        )
        ptac.setName(f"{zone_name} PTAC")
        ptac.setFanPlacement('DrawThrough')
        _set_fan_operating_mode(model, ptac, fan_type)
        ptac.addToThermalZone(zone)
        ptacs.append(ptac)

    return ptacs


def add_pthp(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    thermal_zones: list[openstudio.model.ThermalZone],
    fan_type: str,
    building_type: str | None = None
) -> list[openstudio.model.ZoneHVACPackagedTerminalHeatPump]:
    """Adds a packaged terminal heat pump with electric backup heat to each
    zone in `thermal_zones`. Returns an empty list if `fan_type` is not
    'ConstantVolume' or 'Cycling'.
    """
    if fan_type not in FAN_TYPES:
        logger.error(f"PTHP fan type '{fan_type}' is not recognized, no PTHPs added.")
        return []

    always_on = model.alwaysOnDiscreteSchedule()
    pthps = []
    for zone in thermal_zones:
        zone_name = zone.nameString()
        logger.info(f"Adding PTHP for {zone_name}.")
        _size_zone(zone)

        fan = _add_ptac_fan(model, zone_name, fan_type)
        htg_coil = add_hp_heating_coil(model, f"{zone_name} PTHP Htg Coil")
        clg_coil = add_dx_cooling_coil_single_speed(model, f"{zone_name} PTAC 1spd DX HP Clg Coil", 'HP Clg')
        supplemental_htg_coil = openstudio.model.CoilHeatingElectric(model, always_on)
        supplemental_htg_coil.setName(f"{zone_name} PTHP Supplemental Htg Coil")

        pthp = openstudio.model.ZoneHVACPackagedTerminalHeatPump(
            model, always_on, fan, htg_coil, clg_coil, supplemental_htg_coil
        )
        pthp.setName(f"{zone_name} PTHP")
        pthp.setFanPlacement('DrawThrough')
        _set_fan_operating_mode(model, pthp, fan_type)
        pthp.addToThermalZone(zone)
        pthps.append(pthp)

    return pthps

import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import (
    Template,
    f_to_c,
    in_h2o_to_pa,
    add_schedule,
    apply_zone_sizing,
    create_curve,
    add_dx_cooling_coil_single_speed,
    add_dx_cooling_coil_two_speed,
    add_hp_heating_coil
)
from .common import apply_single_zone_system_sizing, add_diffuser

logger = ModuleLogger.get_logger(__name__)

FAN_TYPES = ('ConstantVolume', 'Cycling')
HEATING_TYPES = ('Gas', 'Single Speed Heat Pump')
SUPPLEMENTAL_HEATING_TYPES = ('Electric', 'Gas')
COOLING_TYPES = ('Two Speed DX AC', 'Single Speed DX AC', 'Single Speed Heat Pump')

SAC_FAN_PRESSURE_RISE_IN_H2O = 2.5
ECON_MAX_OA_FRACTION_SCHEDULE = 'HotelSmall SAC_Econ_MaxOAFrac_Sch'
# standards space type of the zones that run on the alternate schedule
MEETING_SPACE_TYPE = 'Meeting'


def _zone_space_types(zone: openstudio.model.ThermalZone) -> list[str]:
    names = []
    for space in zone.spaces():
        space_type = space.spaceType()
        if not space_type.is_initialized():
            continue
        standards_space_type = space_type.get().standardsSpaceType()
        if standards_space_type.is_initialized():
            names.append(standards_space_type.get())
    return names


def add_split_AC(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    thermal_zones: list[openstudio.model.ThermalZone],
    hvac_op_sch: str | None,
    alt_hvac_op_sch: str | None,
    oa_damper_sch: str | None,
    fan_type: str,
    heating_type: str | None,
    supplemental_heating_type: str | None,
    cooling_type: str | None,
    building_type: str | None = None
) -> openstudio.model.AirLoopHVAC | bool:
    """Creates one split DX air conditioner that serves all `thermal_zones`.
    The first zone controls the supply air temperature.

    If one of the zones holds a meeting space, the system runs on
    `alt_hvac_op_sch` instead of `hvac_op_sch`. The outdoor air controller
    limits the economizer through the schedule
    'HotelSmall SAC_Econ_MaxOAFrac_Sch'.

    Parameters
    ----------
    fan_type:
        'ConstantVolume' or 'Cycling'.
    heating_type:
        'Gas', 'Single Speed Heat Pump' or None.
    supplemental_heating_type:
        'Electric', 'Gas' or None.
    cooling_type:
        'Two Speed DX AC', 'Single Speed DX AC', 'Single Speed Heat Pump' or
        None.

    Returns
    -------
    The air loop, or False if a selection is not recognized or no zones are
    given.
    """
    if not thermal_zones:
        logger.error('No thermal zones given, cannot add split AC.')
        return False
    checks = (
        (fan_type, FAN_TYPES, 'Fan type'),
        (heating_type, HEATING_TYPES + (None,), 'Heating type'),
        (supplemental_heating_type, SUPPLEMENTAL_HEATING_TYPES + (None,), 'Supplemental heating type'),
        (cooling_type, COOLING_TYPES + (None,), 'Cooling type')
    )
    for value, valid, what in checks:
        if value not in valid:
            logger.error(f"{what} '{value}' not recognized, cannot add split AC.")
            return False

    for zone in thermal_zones:
        logger.info(f"Adding split DX AC for {zone.nameString()}.")

    hvac_op_sch = add_schedule(model, hvac_op_sch)
    alt_hvac_op_sch = add_schedule(model, alt_hvac_op_sch)
    oa_damper_sch = add_schedule(model, oa_damper_sch)
    econ_max_oa_frac_sch = add_schedule(model, ECON_MAX_OA_FRACTION_SCHEDULE)
    always_on = model.alwaysOnDiscreteSchedule()

    space_type_names = []
    for zone in thermal_zones:
        space_type_names.extend(_zone_space_types(zone))
        apply_zone_sizing(zone, 14.0, 50.0, 0.008, 0.008)
    thermal_zone_name = ' - '.join(zone.nameString() for zone in thermal_zones)

    if MEETING_SPACE_TYPE in space_type_names:
        hvac_op_sch = alt_hvac_op_sch

    air_loop = openstudio.model.AirLoopHVAC(model)
    air_loop.setName(f"{thermal_zone_name} {sys_name or 'SAC'}")
    air_loop.setAvailabilitySchedule(hvac_op_sch)
    apply_single_zone_system_sizing(
        air_loop,
        precool_temp_c=11.0,
        central_cooling_temp_c=12.0,
        central_heating_temp_c=50.0,
        central_cooling_humidity_ratio=0.008,
        sizing_option='NonCoincident'
    )

    setpoint_mgr_single_zone_reheat = openstudio.model.SetpointManagerSingleZoneReheat(model)
    setpoint_mgr_single_zone_reheat.setControlZone(thermal_zones[0])

    if fan_type == 'ConstantVolume':
        fan = openstudio.model.FanConstantVolume(model, always_on)
        fan.setFanEfficiency(0.56)
        fan.setMotorEfficiency(0.86)
    else:
        fan = openstudio.model.FanOnOff(model, always_on)
        fan.setFanEfficiency(0.53625)
        fan.setMotorEfficiency(0.825)
    fan.setName(f"{thermal_zone_name} SAC Fan")
    fan.setPressureRise(in_h2o_to_pa(SAC_FAN_PRESSURE_RISE_IN_H2O))

    htg_coil = None
    if heating_type == 'Gas':
        htg_coil = openstudio.model.CoilHeatingGas(model, always_on)
        htg_coil.setName(f"{thermal_zone_name} SAC Gas Htg Coil")
        htg_coil.setGasBurnerEfficiency(0.8)
        htg_coil.setPartLoadFractionCorrelationCurve(create_curve(model, 'Gas Htg PLF'))
    elif heating_type == 'Single Speed Heat Pump':
        htg_coil = add_hp_heating_coil(model, f"{thermal_zone_name} SAC HP Htg Coil")

    supplemental_htg_coil = None
    if supplemental_heating_type == 'Electric':
        supplemental_htg_coil = openstudio.model.CoilHeatingElectric(model, always_on)
        supplemental_htg_coil.setName(f"{thermal_zone_name} PSZ-AC Electric Backup Htg Coil")
    elif supplemental_heating_type == 'Gas':
        supplemental_htg_coil = openstudio.model.CoilHeatingGas(model, always_on)
        supplemental_htg_coil.setName(f"{thermal_zone_name} PSZ-AC Gas Backup Htg Coil")

    clg_coil = None
    if cooling_type == 'Two Speed DX AC':
        clg_coil = add_dx_cooling_coil_two_speed(model, f"{thermal_zone_name} SAC 2spd DX AC Clg Coil")
    elif cooling_type == 'Single Speed DX AC':
        clg_coil = add_dx_cooling_coil_single_speed(
            model, f"{thermal_zone_name} SAC 1spd DX AC Clg Coil", 'SAC DX Clg'
        )
    elif cooling_type == 'Single Speed Heat Pump':
        clg_coil = add_dx_cooling_coil_single_speed(
            model, f"{thermal_zone_name} SAC 1spd DX HP Clg Coil", 'HP Clg'
        )

    oa_controller = openstudio.model.ControllerOutdoorAir(model)
    oa_controller.setName(f"{thermal_zone_name} SAC OA Sys Controller")
    oa_controller.setMinimumOutdoorAirSchedule(oa_damper_sch)
    oa_controller.setMaximumFractionofOutdoorAirSchedule(econ_max_oa_frac_sch)
    oa_system = openstudio.model.AirLoopHVACOutdoorAirSystem(model, oa_controller)
    oa_system.setName(f"{thermal_zone_name} SAC OA Sys")

    supply_inlet_node = air_loop.supplyInletNode()
    for component in (fan, supplemental_htg_coil, htg_coil, clg_coil):
        if component is not None:
            component.addToNode(supply_inlet_node)

    setpoint_mgr_single_zone_reheat.setMinimumSupplyAirTemperature(f_to_c(55.4))
    setpoint_mgr_single_zone_reheat.setMaximumSupplyAirTemperature(f_to_c(113.0))
    setpoint_mgr_single_zone_reheat.addToNode(air_loop.supplyOutletNode())

    oa_system.addToNode(supply_inlet_node)

    for zone in thermal_zones:
        add_diffuser(model, air_loop, zone, f"{zone.nameString()} SAC Diffuser")

    logger.info(f"Added split AC {air_loop.nameString()}.")
    return air_loop

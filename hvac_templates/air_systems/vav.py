"""Central variable air volume systems: chilled water VAV with hot water
reheat, VAV with parallel fan powered boxes, and packaged VAV.
"""
import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import (
    Template,
    f_to_c,
    add_schedule,
    add_constant_schedule_ruleset,
    add_water_heating_coil,
    add_dx_cooling_coil_two_speed,
    apply_zone_sizing,
    set_vav_damper_action
)
from .common import (
    PREHEAT_SA_TEMP_F,
    hot_water_conditions,
    apply_multizone_system_sizing,
    add_water_coil_controller_name,
    add_vav_reheat_terminal
)

logger = ModuleLogger.get_logger(__name__)

VAV_CLG_SA_TEMP_F = 55.04
VAV_RHT_SA_TEMP_F = 104.0
LARGE_HOTEL_HTG_SA_TEMP_F = 62.0
MIN_FLOW_FRACTION = 0.25
PFP_FAN_PRESSURE_RISE = 300.0       # Pa

PVAV_CLG_SA_TEMP_F = 55.0
PVAV_SYS_HTG_SA_TEMP_F = 62.0
PVAV_ZONE_HTG_SA_TEMP_F = 122.0
PVAV_RHT_AIR_OUT_TEMP_F = 90.0
# systems with this name part get electric reheat
ELECTRIC_REHEAT_SYSTEM = 'Outpatient F2 F3'


def _log_zones(what: str, thermal_zones: list) -> None:
    logger.info(f"Adding {what} for {len(thermal_zones)} zones.")
    for zone in thermal_zones:
        logger.debug(f"---{zone.nameString()}")


def _supply_air_temp_schedule(model: openstudio.model.Model, temp_f: float) -> openstudio.model.ScheduleRuleset:
    return add_constant_schedule_ruleset(model, f_to_c(temp_f), f"Supply Air Temp - {temp_f:g}F")


def _add_vav_fan(
    model: openstudio.model.Model,
    air_loop: openstudio.model.AirLoopHVAC,
    fan_efficiency: float,
    fan_motor_efficiency: float,
    fan_pressure_rise: float
) -> openstudio.model.FanVariableVolume:
    fan = openstudio.model.FanVariableVolume(model, model.alwaysOnDiscreteSchedule())
    fan.setName(f"{air_loop.nameString()} Fan")
    fan.setFanEfficiency(fan_efficiency)
    fan.setMotorEfficiency(fan_motor_efficiency)
    fan.setPressureRise(fan_pressure_rise)
    fan.setFanPowerMinimumFlowRateInputMethod('fraction')
    fan.setFanPowerMinimumFlowFraction(MIN_FLOW_FRACTION)
    fan.addToNode(air_loop.supplyInletNode())
    fan.setEndUseSubcategory('VAV system Fans')
    return fan


def _add_chilled_water_coil(
    model: openstudio.model.Model,
    air_loop: openstudio.model.AirLoopHVAC,
    chilled_water_loop: openstudio.model.PlantLoop
) -> openstudio.model.CoilCoolingWater:
    loop_name = air_loop.nameString()
    clg_coil = openstudio.model.CoilCoolingWater(model, model.alwaysOnDiscreteSchedule())
    clg_coil.setName(f"{loop_name} Clg Coil")
    clg_coil.addToNode(air_loop.supplyInletNode())
    clg_coil.setHeatExchangerConfiguration('CrossFlow')
    chilled_water_loop.addDemandBranchForComponent(clg_coil)
    add_water_coil_controller_name(clg_coil, f"{loop_name} Clg Coil Controller")
    return clg_coil


def _add_vav_oa_system(
    model: openstudio.model.Model,
    air_loop: openstudio.model.AirLoopHVAC,
    economizer_control_type: str | None = None
) -> openstudio.model.AirLoopHVACOutdoorAirSystem:
    loop_name = air_loop.nameString()
    oa_intake_controller = openstudio.model.ControllerOutdoorAir(model)
    oa_intake_controller.setName(f"{loop_name} OA Controller")
    oa_intake_controller.setMinimumLimitType('FixedMinimum')
    oa_intake_controller.setHeatRecoveryBypassControlType('BypassWhenOAFlowGreaterThanMinimum')
    if economizer_control_type is not None:
        oa_intake_controller.setEconomizerControlType(economizer_control_type)
        oa_intake_controller.resetMaximumFractionofOutdoorAirSchedule()
        oa_intake_controller.resetEconomizerMinimumLimitDryBulbTemperature()

    controller_mv = oa_intake_controller.controllerMechanicalVentilation()
    controller_mv.setName(f"{loop_name} Vent Controller")
    controller_mv.setSystemOutdoorAirMethod('VentilationRateProcedure')

    oa_intake = openstudio.model.AirLoopHVACOutdoorAirSystem(model, oa_intake_controller)
    oa_intake.setName(f"{loop_name} OA Sys")
    oa_intake.addToNode(air_loop.supplyInletNode())
    return oa_intake


def add_vav_reheat(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    hot_water_loop: openstudio.model.PlantLoop,
    chilled_water_loop: openstudio.model.PlantLoop,
    thermal_zones: list[openstudio.model.ThermalZone],
    hvac_op_sch: str | None,
    oa_damper_sch: str | None,
    vav_fan_efficiency: float,
    vav_fan_motor_efficiency: float,
    vav_fan_pressure_rise: float,
    return_plenum: openstudio.model.ThermalZone | None = None,
    building_type: str | None = None
) -> openstudio.model.AirLoopHVAC | bool:
    """Creates a VAV system with a hot water main heating coil, a chilled
    water cooling coil and VAV boxes with hot water reheat.

    The supply air is held at 55.04 °F by a scheduled setpoint. The boxes
    reheat to 104 °F. Large hotels heat the central deck to 62 °F and use a
    differential enthalpy economizer. The motorized damper schedule
    `oa_damper_sch` is loaded into the model but not put on the outdoor air
    controller, whose minimum follows the zone ventilation sums.

    Parameters
    ----------
    vav_fan_efficiency:
        Total efficiency of the supply fan.
    vav_fan_motor_efficiency:
        Motor efficiency of the supply fan.
    vav_fan_pressure_rise:
        Pressure rise of the supply fan in Pa.
    return_plenum:
        Zone that serves as return plenum for all `thermal_zones`, or None.

    Returns
    -------
    The air loop, or False if a water loop is missing.
    """
    if hot_water_loop is None or chilled_water_loop is None:
        logger.error('A VAV reheat system needs a hot water and a chilled water loop.')
        return False
    _log_zones('VAV system', thermal_zones)

    hw_temp_c, hw_delta_t_k = hot_water_conditions()
    clg_sa_temp_f = VAV_CLG_SA_TEMP_F
    htg_sa_temp_f = LARGE_HOTEL_HTG_SA_TEMP_F if building_type == 'LargeHotel' else VAV_CLG_SA_TEMP_F
    clg_sa_temp_c = f_to_c(clg_sa_temp_f)
    prehtg_sa_temp_c = f_to_c(PREHEAT_SA_TEMP_F)
    htg_sa_temp_c = f_to_c(htg_sa_temp_f)
    rht_sa_temp_c = f_to_c(VAV_RHT_SA_TEMP_F)

    hvac_op_sch = add_schedule(model, hvac_op_sch)
    add_schedule(model, oa_damper_sch)
    sa_temp_sch = _supply_air_temp_schedule(model, clg_sa_temp_f)

    air_loop = openstudio.model.AirLoopHVAC(model)
    air_loop.setName(sys_name or f"{len(thermal_zones)} Zone VAV")
    air_loop.setAvailabilitySchedule(hvac_op_sch)
    loop_name = air_loop.nameString()

    sa_stpt_manager = openstudio.model.SetpointManagerScheduled(model, sa_temp_sch)
    sa_stpt_manager.setName(f"{len(thermal_zones)} Zone VAV supply air setpoint manager")
    sa_stpt_manager.addToNode(air_loop.supplyOutletNode())

    apply_multizone_system_sizing(air_loop, prehtg_sa_temp_c, clg_sa_temp_c, clg_sa_temp_c, htg_sa_temp_c)

    _add_vav_fan(model, air_loop, vav_fan_efficiency, vav_fan_motor_efficiency, vav_fan_pressure_rise)

    if building_type == 'LargeHotel':
        main_air_in_c, main_air_out_c = htg_sa_temp_c, rht_sa_temp_c
    else:
        main_air_in_c, main_air_out_c = prehtg_sa_temp_c, htg_sa_temp_c
    htg_coil = add_water_heating_coil(
        model, f"{loop_name} Main Htg Coil", hot_water_loop,
        hw_temp_c, hw_delta_t_k, main_air_in_c, main_air_out_c
    )
    htg_coil.addToNode(air_loop.supplyInletNode())
    add_water_coil_controller_name(htg_coil, f"{loop_name} Main Htg Coil Controller")

    _add_chilled_water_coil(model, air_loop, chilled_water_loop)

    economizer = 'DifferentialEnthalpy' if building_type == 'LargeHotel' else None
    _add_vav_oa_system(model, air_loop, economizer)
    air_loop.setNightCycleControlType('CycleOnAny')

    for zone in thermal_zones:
        zone_name = zone.nameString()
        rht_coil = add_water_heating_coil(
            model, f"{zone_name} Rht Coil", hot_water_loop,
            hw_temp_c, hw_delta_t_k, htg_sa_temp_c, rht_sa_temp_c
        )
        add_vav_reheat_terminal(model, standard, air_loop, zone, rht_coil, rht_sa_temp_c)

        sizing_zone = apply_zone_sizing(zone, clg_sa_temp_c, rht_sa_temp_c)
        if building_type == 'SecondarySchool':
            sizing_zone.setCoolingDesignAirFlowMethod('DesignDay')
        else:
            sizing_zone.setCoolingDesignAirFlowMethod('DesignDayWithLimit')
        sizing_zone.setHeatingDesignAirFlowMethod('DesignDay')

        if return_plenum is not None:
            zone.setReturnPlenum(return_plenum)

    set_vav_damper_action(air_loop, standard)
    logger.info(f"Added VAV system {loop_name}.")
    return air_loop


def add_vav_pfp_boxes(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    chilled_water_loop: openstudio.model.PlantLoop,
    thermal_zones: list[openstudio.model.ThermalZone],
    hvac_op_sch: str | None,
    oa_damper_sch: str | None,
    vav_fan_efficiency: float,
    vav_fan_motor_efficiency: float,
    vav_fan_pressure_rise: float,
    building_type: str | None = None
) -> openstudio.model.AirLoopHVAC | bool:
    """Creates a VAV system with an electric main heating coil, a chilled
    water cooling coil and parallel fan powered boxes with electric reheat.

    Returns
    -------
    The air loop, or False if the chilled water loop is missing.
    """
    if chilled_water_loop is None:
        logger.error('A VAV system with PFP boxes needs a chilled water loop.')
        return False
    _log_zones('VAV with PFP Boxes and Reheat system', thermal_zones)

    clg_sa_temp_c = f_to_c(VAV_CLG_SA_TEMP_F)
    prehtg_sa_temp_c = f_to_c(PREHEAT_SA_TEMP_F)
    zone_htg_sa_temp_c = f_to_c(VAV_RHT_SA_TEMP_F)

    hvac_op_sch = add_schedule(model, hvac_op_sch)
    add_schedule(model, oa_damper_sch)
    sa_temp_sch = _supply_air_temp_schedule(model, VAV_CLG_SA_TEMP_F)
    always_on = model.alwaysOnDiscreteSchedule()

    air_loop = openstudio.model.AirLoopHVAC(model)
    air_loop.setName(sys_name or f"{len(thermal_zones)} Zone VAV with PFP Boxes and Reheat")
    air_loop.setAvailabilitySchedule(hvac_op_sch)
    loop_name = air_loop.nameString()

    sa_stpt_manager = openstudio.model.SetpointManagerScheduled(model, sa_temp_sch)
    sa_stpt_manager.setName(f"{len(thermal_zones)} Zone VAV supply air setpoint manager")
    sa_stpt_manager.addToNode(air_loop.supplyOutletNode())

    apply_multizone_system_sizing(air_loop, prehtg_sa_temp_c, clg_sa_temp_c, clg_sa_temp_c, clg_sa_temp_c)

    _add_vav_fan(model, air_loop, vav_fan_efficiency, vav_fan_motor_efficiency, vav_fan_pressure_rise)

    htg_coil = openstudio.model.CoilHeatingElectric(model, always_on)
    htg_coil.setName(f"{loop_name} Htg Coil")
    htg_coil.addToNode(air_loop.supplyInletNode())

    _add_chilled_water_coil(model, air_loop, chilled_water_loop)

    _add_vav_oa_system(model, air_loop)
    air_loop.setNightCycleControlType('CycleOnAny')

    for zone in thermal_zones:
        zone_name = zone.nameString()
        rht_coil = openstudio.model.CoilHeatingElectric(model, always_on)
        rht_coil.setName(f"{zone_name} Rht Coil")

        pfp_fan = openstudio.model.FanConstantVolume(model, always_on)
        pfp_fan.setName(f"{zone_name} PFP Term Fan")
        pfp_fan.setPressureRise(PFP_FAN_PRESSURE_RISE)

        pfp_terminal = openstudio.model.AirTerminalSingleDuctParallelPIUReheat(
            model, always_on, pfp_fan, rht_coil
        )
        pfp_terminal.setName(f"{zone_name} PFP Term")
        air_loop.addBranchForZone(zone, pfp_terminal.to_StraightComponent())

        sizing_zone = apply_zone_sizing(zone, clg_sa_temp_c, zone_htg_sa_temp_c)
        sizing_zone.setCoolingDesignAirFlowMethod('DesignDay')
        sizing_zone.setHeatingDesignAirFlowMethod('DesignDay')

    logger.info(f"Added VAV system {loop_name}.")
    return air_loop


def add_pvav(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    thermal_zones: list[openstudio.model.ThermalZone],
    hvac_op_sch: str | None,
    oa_damper_sch: str | None,
    hot_water_loop: openstudio.model.PlantLoop | None = None,
    return_plenum: openstudio.model.ThermalZone | None = None
) -> openstudio.model.AirLoopHVAC:
    """Creates a packaged VAV system with a two speed DX cooling coil.

    Without `hot_water_loop` the main heating coil burns gas and the VAV
    boxes reheat electrically. With a loop both are hot water coils, except
    for systems whose name contains 'Outpatient F2 F3', which keep electric
    reheat.
    """
    _log_zones('Packaged VAV', thermal_zones)

    hw_temp_c, hw_delta_t_k = hot_water_conditions()
    sys_dsn_htg_sa_temp_c = f_to_c(PVAV_SYS_HTG_SA_TEMP_F)
    zn_dsn_clg_sa_temp_c = f_to_c(PVAV_CLG_SA_TEMP_F)
    zn_dsn_htg_sa_temp_c = f_to_c(PVAV_ZONE_HTG_SA_TEMP_F)
    rht_rated_air_in_temp_c = f_to_c(PVAV_SYS_HTG_SA_TEMP_F)
    rht_rated_air_out_temp_c = f_to_c(PVAV_RHT_AIR_OUT_TEMP_F)

    hvac_op_sch = add_schedule(model, hvac_op_sch)
    oa_damper_sch = add_schedule(model, oa_damper_sch)
    sa_temp_sch = _supply_air_temp_schedule(model, PVAV_CLG_SA_TEMP_F)
    always_on = model.alwaysOnDiscreteSchedule()

    sys_name = sys_name or f"{len(thermal_zones)} Zone PVAV"
    air_loop = openstudio.model.AirLoopHVAC(model)
    air_loop.setName(sys_name)
    air_loop.setAvailabilitySchedule(hvac_op_sch)
    loop_name = air_loop.nameString()

    stpt_manager = openstudio.model.SetpointManagerScheduled(model, sa_temp_sch)
    stpt_manager.addToNode(air_loop.supplyOutletNode())

    sizing_system = air_loop.sizingSystem()
    sizing_system.setCentralHeatingDesignSupplyAirTemperature(sys_dsn_htg_sa_temp_c)
    sizing_system.setSizingOption('Coincident')
    sizing_system.setAllOutdoorAirinCooling(False)
    sizing_system.setAllOutdoorAirinHeating(False)
    air_loop.setNightCycleControlType('CycleOnAny')

    fan = openstudio.model.FanVariableVolume(model, always_on)
    fan.setName(f"{loop_name} Fan")
    fan.addToNode(air_loop.supplyInletNode())

    if hot_water_loop is None:
        htg_coil = openstudio.model.CoilHeatingGas(model, always_on)
        htg_coil.setName(f"{loop_name} Main Htg Coil")
    else:
        htg_coil = add_water_heating_coil(
            model, f"{loop_name} Main Htg Coil", hot_water_loop,
            hw_temp_c, hw_delta_t_k, rht_rated_air_in_temp_c, rht_rated_air_out_temp_c
        )
    htg_coil.addToNode(air_loop.supplyInletNode())

    clg_coil = add_dx_cooling_coil_two_speed(model, f"{loop_name} Clg Coil")
    clg_coil.addToNode(air_loop.supplyInletNode())

    oa_intake_controller = openstudio.model.ControllerOutdoorAir(model)
    oa_intake_controller.setName(f"{loop_name} OA Controller")
    oa_intake_controller.setMinimumLimitType('FixedMinimum')
    oa_intake = openstudio.model.AirLoopHVACOutdoorAirSystem(model, oa_intake_controller)
    oa_intake.setName(f"{loop_name} OA Sys")
    oa_intake.addToNode(air_loop.supplyInletNode())
    oa_intake_controller.controllerMechanicalVentilation().setName(f"{loop_name} Ventilation Controller")

    electric_reheat = hot_water_loop is None or ELECTRIC_REHEAT_SYSTEM in sys_name
    for zone in thermal_zones:
        zone_name = zone.nameString()
        if electric_reheat:
            rht_coil = openstudio.model.CoilHeatingElectric(model, always_on)
            rht_coil.setName(f"{zone_name} Rht Coil")
        else:
            rht_coil = add_water_heating_coil(
                model, f"{zone_name} Rht Coil", hot_water_loop,
                hw_temp_c, hw_delta_t_k, rht_rated_air_in_temp_c, rht_rated_air_out_temp_c
            )
        add_vav_reheat_terminal(model, standard, air_loop, zone, rht_coil)

        if return_plenum is not None:
            zone.setReturnPlenum(return_plenum)
        apply_zone_sizing(zone, zn_dsn_clg_sa_temp_c, zn_dsn_htg_sa_temp_c)

    set_vav_damper_action(air_loop, standard)
    logger.info(f"Added packaged VAV system {loop_name}.")
    return air_loop

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

CAV_HW_TEMP_F = 152.6
CAV_CLG_SA_TEMP_F = 55.04
CAV_HTG_SA_TEMP_F = 62.06
CAV_RHT_SA_TEMP_F = 122.0


def add_cav(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    hot_water_loop: openstudio.model.PlantLoop,
    thermal_zones: list[openstudio.model.ThermalZone],
    hvac_op_sch: str | None,
    oa_damper_sch: str | None,
    fan_efficiency: float,
    fan_motor_efficiency: float,
    fan_pressure_rise: float,
    building_type: str | None = None
) -> openstudio.model.AirLoopHVAC | bool:
    """Creates a constant air volume system with a hot water main heating
    coil (152.6 °F water), a two speed DX cooling coil and reheat boxes
    that heat the 62.06 °F deck air up to 122 °F.

    Parameters
    ----------
    fan_pressure_rise:
        Pressure rise of the supply fan in Pa.
    oa_damper_sch:
        Name of the schedule that sets the minimum fraction of outdoor air.

    Returns
    -------
    The air loop, or False if the hot water loop is missing.
    """
    if hot_water_loop is None:
        logger.error('A CAV system needs a hot water loop.')
        return False
    logger.info(f"Adding CAV for {len(thermal_zones)} zones.")
    for zone in thermal_zones:
        logger.debug(f"---{zone.nameString()}")

    hw_temp_c, hw_delta_t_k = hot_water_conditions(CAV_HW_TEMP_F)
    clg_sa_temp_c = f_to_c(CAV_CLG_SA_TEMP_F)
    prehtg_sa_temp_c = f_to_c(PREHEAT_SA_TEMP_F)
    htg_sa_temp_c = f_to_c(CAV_HTG_SA_TEMP_F)
    rht_sa_temp_c = f_to_c(CAV_RHT_SA_TEMP_F)

    hvac_op_sch = add_schedule(model, hvac_op_sch)
    oa_damper_sch = add_schedule(model, oa_damper_sch)
    always_on = model.alwaysOnDiscreteSchedule()

    air_loop = openstudio.model.AirLoopHVAC(model)
    air_loop.setName(sys_name or f"{len(thermal_zones)} Zone CAV")
    air_loop.setAvailabilitySchedule(hvac_op_sch)
    loop_name = air_loop.nameString()

    sa_temp_sch = add_constant_schedule_ruleset(
        model, clg_sa_temp_c, f"Supply Air Temp - {CAV_CLG_SA_TEMP_F:g}F"
    )
    sa_stpt_manager = openstudio.model.SetpointManagerScheduled(model, sa_temp_sch)
    sa_stpt_manager.setName(f"{loop_name} supply air setpoint manager")
    sa_stpt_manager.addToNode(air_loop.supplyOutletNode())

    apply_multizone_system_sizing(air_loop, prehtg_sa_temp_c, clg_sa_temp_c, clg_sa_temp_c, htg_sa_temp_c)

    fan = openstudio.model.FanConstantVolume(model, always_on)
    fan.setName(f"{loop_name} Fan")
    fan.setFanEfficiency(fan_efficiency)
    fan.setMotorEfficiency(fan_motor_efficiency)
    fan.setPressureRise(fan_pressure_rise)
    fan.addToNode(air_loop.supplyInletNode())
    fan.setEndUseSubcategory('CAV system Fans')

    htg_coil = add_water_heating_coil(
        model, f"{loop_name} Main Htg Coil", hot_water_loop,
        hw_temp_c, hw_delta_t_k, prehtg_sa_temp_c, htg_sa_temp_c
    )
    htg_coil.addToNode(air_loop.supplyInletNode())
    add_water_coil_controller_name(htg_coil, f"{loop_name} Main Htg Coil Controller")

    clg_coil = add_dx_cooling_coil_two_speed(model, f"{loop_name} Clg Coil")
    clg_coil.addToNode(air_loop.supplyInletNode())

    oa_intake_controller = openstudio.model.ControllerOutdoorAir(model)
    oa_intake_controller.setName(f"{loop_name} OA Controller")
    oa_intake_controller.setMinimumLimitType('FixedMinimum')
    oa_intake_controller.setMinimumFractionofOutdoorAirSchedule(oa_damper_sch)
    oa_intake_controller.setHeatRecoveryBypassControlType('BypassWhenOAFlowGreaterThanMinimum')
    controller_mv = oa_intake_controller.controllerMechanicalVentilation()
    controller_mv.setName(f"{loop_name} Vent Controller")
    controller_mv.setSystemOutdoorAirMethod('ZoneSum')
    oa_intake = openstudio.model.AirLoopHVACOutdoorAirSystem(model, oa_intake_controller)
    oa_intake.setName(f"{loop_name} OA Sys")
    oa_intake.addToNode(air_loop.supplyInletNode())
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

    set_vav_damper_action(air_loop, standard)
    logger.info(f"Added CAV system {loop_name}.")
    return air_loop

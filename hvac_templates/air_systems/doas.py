import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import Template, add_schedule, apply_zone_sizing

logger = ModuleLogger.get_logger(__name__)

DOAS_FAN_EFFICIENCY = 0.58175
DOAS_FAN_PRESSURE_RISE = 622.5      # Pa
DOAS_FAN_MOTOR_EFFICIENCY = 0.895
FCU_FAN_EFFICIENCY = 0.16
FCU_FAN_PRESSURE_RISE = 270.9       # Pa
FCU_FAN_MOTOR_EFFICIENCY = 0.29
LARGE_HOTEL_MIN_OA_FRACTION_SCHEDULE = 'HotelLarge FLR_3_DOAS_OAminOAFracSchedule'


def _add_water_coil(model, coil_class, name, plant_loop):
    coil = coil_class(model, model.alwaysOnDiscreteSchedule())
    if name is not None:
        coil.setName(name)
    plant_loop.addDemandBranchForComponent(coil)
    return coil


def _set_min_actuated_flow(coil) -> None:
    controller = coil.controllerWaterCoil()
    if controller.is_initialized():
        controller.get().setMinimumActuatedFlow(0)


def add_doas(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    hot_water_loop: openstudio.model.PlantLoop,
    chilled_water_loop: openstudio.model.PlantLoop,
    thermal_zones: list[openstudio.model.ThermalZone],
    hvac_op_sch: str | None,
    oa_damper_sch: str | None,
    fan_max_flow_rate: float | None,
    economizer_control_type: str,
    building_type: str | None = None
) -> openstudio.model.AirLoopHVAC | bool:
    """Creates a dedicated outdoor air system: a 100 % outdoor air loop with
    water coils and an outdoor air reset setpoint (15.5 °C supply below
    15.5 °C outdoors, 12.8 °C supply above 21 °C outdoors). Each zone gets a
    four pipe fan coil that handles the loads, and an uncontrolled terminal
    for the ventilation air.

    Parameters
    ----------
    fan_max_flow_rate:
        Design flow of the DOAS fan in m3/s. None means autosized.
    economizer_control_type:
        Economizer control of the outdoor air controller, e.g.
        'NoEconomizer' or 'FixedDryBulb'.

    Returns
    -------
    The air loop, or False if one of the water loops is missing.
    """
    if hot_water_loop is None or chilled_water_loop is None:
        logger.error('A DOAS needs a hot water and a chilled water loop.')
        return False

    logger.info(f"Adding DOAS system for {len(thermal_zones)} zones.")
    for zone in thermal_zones:
        logger.debug(f"---{zone.nameString()}")

    hvac_op_sch = add_schedule(model, hvac_op_sch)
    oa_damper_sch = add_schedule(model, oa_damper_sch)
    always_on = model.alwaysOnDiscreteSchedule()

    air_loop = openstudio.model.AirLoopHVAC(model)
    air_loop.setName(sys_name or f"{len(thermal_zones)} DOAS Air Loop HVAC")
    air_loop.setNightCycleControlType('CycleOnAny')
    air_loop.setAvailabilitySchedule(hvac_op_sch)

    sizing_system = air_loop.sizingSystem()
    sizing_system.setCentralCoolingDesignSupplyAirTemperature(12.8)
    sizing_system.setCentralHeatingDesignSupplyAirTemperature(16.7)
    sizing_system.setSizingOption('Coincident')
    sizing_system.setSystemOutdoorAirMethod('ZoneSum')
    sizing_system.setTypeofLoadtoSizeOn('Sensible')
    sizing_system.setAllOutdoorAirinCooling(True)
    sizing_system.setAllOutdoorAirinHeating(True)
    sizing_system.setCentralHeatingMaximumSystemAirFlowRatio(0.3)

    airloop_supply_inlet = air_loop.supplyInletNode()

    fan = openstudio.model.FanConstantVolume(model, always_on)
    fan.setName('DOAS fan')
    fan.setFanEfficiency(DOAS_FAN_EFFICIENCY)
    fan.setPressureRise(DOAS_FAN_PRESSURE_RISE)
    if fan_max_flow_rate is not None:
        fan.setMaximumFlowRate(fan_max_flow_rate)
    else:
        fan.autosizeMaximumFlowRate()
    fan.setMotorEfficiency(DOAS_FAN_MOTOR_EFFICIENCY)
    fan.setMotorInAirstreamFraction(1.0)
    fan.setEndUseSubcategory('DOAS Fans')
    fan.addToNode(airloop_supply_inlet)

    heating_coil = _add_water_coil(model, openstudio.model.CoilHeatingWater, 'DOAS Htg Coil', hot_water_loop)
    heating_coil.addToNode(airloop_supply_inlet)
    _set_min_actuated_flow(heating_coil)
    controller = heating_coil.controllerWaterCoil()
    if controller.is_initialized():
        controller.get().setControllerConvergenceTolerance(0.0001)

    cooling_coil = _add_water_coil(model, openstudio.model.CoilCoolingWater, 'DOAS Clg Coil', chilled_water_loop)
    cooling_coil.addToNode(airloop_supply_inlet)
    _set_min_actuated_flow(cooling_coil)

    controller_oa = openstudio.model.ControllerOutdoorAir(model)
    controller_oa.setName('DOAS OA Controller')
    controller_oa.setEconomizerControlType(economizer_control_type)
    controller_oa.setMinimumLimitType('FixedMinimum')
    controller_oa.setMinimumOutdoorAirSchedule(oa_damper_sch)
    controller_oa.resetEconomizerMaximumLimitDryBulbTemperature()
    if building_type == 'LargeHotel':
        controller_oa.setMinimumFractionofOutdoorAirSchedule(
            add_schedule(model, LARGE_HOTEL_MIN_OA_FRACTION_SCHEDULE)
        )
    controller_oa.resetEconomizerMaximumLimitEnthalpy()
    controller_oa.resetMaximumFractionofOutdoorAirSchedule()
    controller_oa.resetEconomizerMinimumLimitDryBulbTemperature()
    controller_oa.setHeatRecoveryBypassControlType('BypassWhenWithinEconomizerLimits')
    system_oa = openstudio.model.AirLoopHVACOutdoorAirSystem(model, controller_oa)
    system_oa.setName('DOAS OA Sys')
    system_oa.addToNode(airloop_supply_inlet)

    setpoint_manager = openstudio.model.SetpointManagerOutdoorAirReset(model)
    setpoint_manager.setControlVariable('Temperature')
    setpoint_manager.setSetpointatOutdoorLowTemperature(15.5)
    setpoint_manager.setOutdoorLowTemperature(15.5)
    setpoint_manager.setSetpointatOutdoorHighTemperature(12.8)
    setpoint_manager.setOutdoorHighTemperature(21)
    setpoint_manager.addToNode(air_loop.supplyOutletNode())

    for zone in thermal_zones:
        zone_name = zone.nameString()
        zone_sizing = apply_zone_sizing(zone, 12.8, 40.0)
        zone_sizing.setCoolingDesignAirFlowMethod('DesignDayWithLimit')
        zone_sizing.setHeatingDesignAirFlowMethod('DesignDay')

        air_terminal = openstudio.model.AirTerminalSingleDuctConstantVolumeNoReheat(model, always_on)
        air_terminal.setName(f"{zone_name} Air Terminal")

        fan_coil_cooling_coil = _add_water_coil(
            model, openstudio.model.CoilCoolingWater, f"{zone_name} FCU Cooling Coil", chilled_water_loop
        )
        _set_min_actuated_flow(fan_coil_cooling_coil)
        fan_coil_heating_coil = _add_water_coil(
            model, openstudio.model.CoilHeatingWater, f"{zone_name} FCU Heating Coil", hot_water_loop
        )
        _set_min_actuated_flow(fan_coil_heating_coil)

        fan_coil_fan = openstudio.model.FanOnOff(model, always_on)
        fan_coil_fan.setName(f"{zone_name} Fan Coil fan")
        fan_coil_fan.setFanEfficiency(FCU_FAN_EFFICIENCY)
        fan_coil_fan.setPressureRise(FCU_FAN_PRESSURE_RISE)
        fan_coil_fan.autosizeMaximumFlowRate()
        fan_coil_fan.setMotorEfficiency(FCU_FAN_MOTOR_EFFICIENCY)
        fan_coil_fan.setMotorInAirstreamFraction(1.0)
        fan_coil_fan.setEndUseSubcategory('FCU Fans')

        fan_coil = openstudio.model.ZoneHVACFourPipeFanCoil(
            model, always_on, fan_coil_fan, fan_coil_cooling_coil, fan_coil_heating_coil
        )
        fan_coil.setName(f"{zone_name} FCU")
        fan_coil.setCapacityControlMethod('CyclingFan')
        fan_coil.autosizeMaximumSupplyAirFlowRate()
        fan_coil.setMaximumOutdoorAirFlowRate(0)
        fan_coil.addToThermalZone(zone)

        air_loop.addBranchForZone(zone, air_terminal.to_StraightComponent())

    logger.info(f"Added DOAS {air_loop.nameString()}.")
    return air_loop

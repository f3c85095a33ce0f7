"""Packaged single zone systems: one air loop per zone with a constant
volume or cycling fan, a heating coil, an optional supplemental heating coil
and a cooling coil. Data centers get water-to-air heat pumps on the heat pump
loop.
"""
import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import (
    Template,
    is_doe_ref,
    template_name,
    f_to_c,
    in_h2o_to_pa,
    add_schedule,
    apply_zone_sizing,
    outlet_node,
    add_dx_cooling_coil_single_speed,
    add_dx_cooling_coil_two_speed,
    add_hp_heating_coil,
    add_wahp_heating_coil,
    add_wahp_cooling_coil,
    add_water_heating_coil
)
from .common import (
    PREHEAT_SA_TEMP_F,
    hot_water_conditions,
    apply_single_zone_system_sizing,
    add_diffuser
)

logger = ModuleLogger.get_logger(__name__)

FAN_TYPES = ('ConstantVolume', 'Cycling')
FAN_LOCATIONS = ('DrawThrough', 'BlowThrough')
HEATING_TYPES = ('Gas', 'Water', 'Single Speed Heat Pump', 'Water To Air Heat Pump')
SUPPLEMENTAL_HEATING_TYPES = ('Electric', 'Gas')
COOLING_TYPES = ('Water', 'Two Speed DX AC', 'Single Speed DX AC', 'Single Speed Heat Pump', 'Water To Air Heat Pump')

PSZ_FAN_PRESSURE_RISE_IN_H2O = 2.5
PSZ_FAN_EFFICIENCY = 0.54
PSZ_FAN_MOTOR_EFFICIENCY = 0.90
CLG_SA_TEMP_F = 55.0
HTG_SA_TEMP_F = 55.0
# steam humidifier of the main data center
HUMIDIFIER_RATED_CAPACITY = 3.72e-5     # m3/s
HUMIDIFIER_RATED_POWER = 100_000.0      # W
DC_MIN_RH_SCHEDULE = 'OfficeLarge DC_MinRelHumSetSch'


def _add_psz_fan(model, name, fan_type, schedule):
    if fan_type == 'ConstantVolume':
        fan = openstudio.model.FanConstantVolume(model, schedule)
    else:
        fan = openstudio.model.FanOnOff(model, schedule)
    fan.setName(name)
    fan.setPressureRise(in_h2o_to_pa(PSZ_FAN_PRESSURE_RISE_IN_H2O))
    fan.setFanEfficiency(PSZ_FAN_EFFICIENCY)
    fan.setMotorEfficiency(PSZ_FAN_MOTOR_EFFICIENCY)
    return fan


def _check_selections(
    fan_type: str,
    fan_location: str,
    heating_type: str | None,
    supplemental_heating_type: str | None,
    cooling_type: str | None,
    hot_water_loop,
    chilled_water_loop
) -> bool:
    if fan_type not in FAN_TYPES:
        logger.error(f"Fan type '{fan_type}' not recognized, cannot add PSZ-AC.")
        return False
    if fan_type != 'Cycling' and fan_location not in FAN_LOCATIONS:
        logger.error(f"Invalid fan location '{fan_location}', cannot add PSZ-AC.")
        return False
    if heating_type is not None and heating_type not in HEATING_TYPES:
        logger.error(f"Heating type '{heating_type}' not recognized, cannot add PSZ-AC.")
        return False
    if supplemental_heating_type is not None and supplemental_heating_type not in SUPPLEMENTAL_HEATING_TYPES:
        logger.error(f"Supplemental heating type '{supplemental_heating_type}' not recognized, cannot add PSZ-AC.")
        return False
    if cooling_type is not None and cooling_type not in COOLING_TYPES:
        logger.error(f"Cooling type '{cooling_type}' not recognized, cannot add PSZ-AC.")
        return False
    if (
        fan_type == 'Cycling' and heating_type != 'Water To Air Heat Pump'
        and None in (heating_type, supplemental_heating_type, cooling_type)
    ):
        logger.error('A unitary heat pump needs a heating, a supplemental heating and a cooling coil.')
        return False
    if heating_type in ('Water', 'Water To Air Heat Pump') and hot_water_loop is None:
        logger.error('No hot water plant loop supplied.')
        return False
    if cooling_type in ('Water', 'Water To Air Heat Pump') and chilled_water_loop is None:
        logger.error('No chilled water plant loop supplied.')
        return False
    return True


def add_psz_ac(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    hot_water_loop: openstudio.model.PlantLoop | None,
    chilled_water_loop: openstudio.model.PlantLoop | None,
    thermal_zones: list[openstudio.model.ThermalZone],
    hvac_op_sch: str | None,
    oa_damper_sch: str | None,
    fan_location: str,
    fan_type: str,
    heating_type: str | None,
    supplemental_heating_type: str | None,
    cooling_type: str | None,
    building_type: str | None = None
) -> list[openstudio.model.AirLoopHVAC]:
    """Creates a packaged single zone air conditioner for each zone in
    `thermal_zones`.

    Parameters
    ----------
    model:
        The building model.
    standard:
        Code vintage.
    sys_name:
        Appended to the zone name to name the air loop. Defaults to 'PSZ-AC'.
    hot_water_loop:
        Loop that serves 'Water' and 'Water To Air Heat Pump' heating coils.
    chilled_water_loop:
        Loop that serves 'Water' and 'Water To Air Heat Pump' cooling coils.
    thermal_zones:
        The zones to serve.
    hvac_op_sch:
        Name of the HVAC operation schedule. None means always on.
    oa_damper_sch:
        Name of the minimum outdoor air schedule. None means always open.
    fan_location:
        'DrawThrough' or 'BlowThrough'.
    fan_type:
        'ConstantVolume': a packaged rooftop unit; the fan and coils are put
        on the loop one by one. 'Cycling': a unitary heat pump (or a unitary
        system with water-to-air heat pump coils) wraps fan and coils.
    heating_type:
        'Gas', 'Water', 'Single Speed Heat Pump', 'Water To Air Heat Pump'
        or None.
    supplemental_heating_type:
        'Electric', 'Gas' or None.
    cooling_type:
        'Water', 'Two Speed DX AC', 'Single Speed DX AC', 'Single Speed Heat
        Pump', 'Water To Air Heat Pump' or None.
    building_type:
        Standalone retail in the DOE reference vintages is sized with 14 °C
        cooling supply air.

    Returns
    -------
    The air loops, or an empty list if a selection is not recognized or a
    required plant loop is missing.
    """
    if not _check_selections(
        fan_type, fan_location, heating_type, supplemental_heating_type,
        cooling_type, hot_water_loop, chilled_water_loop
    ):
        return []

    hw_temp_c, hw_delta_t_k = hot_water_conditions()
    hvac_op_sch = add_schedule(model, hvac_op_sch)
    oa_damper_sch = add_schedule(model, oa_damper_sch)
    always_on = model.alwaysOnDiscreteSchedule()

    air_loops = []
    for zone in thermal_zones:
        zone_name = zone.nameString()
        logger.info(f"Adding PSZ-AC for {zone_name}.")

        air_loop = openstudio.model.AirLoopHVAC(model)
        air_loop.setName(f"{zone_name} {sys_name or 'PSZ-AC'}")
        air_loop.setAvailabilitySchedule(hvac_op_sch)
        loop_name = air_loop.nameString()
        air_loops.append(air_loop)

        apply_single_zone_system_sizing(air_loop)
        if building_type == 'RetailStandalone' and is_doe_ref(standard):
            apply_zone_sizing(zone, 14.0, 40.0)
        else:
            apply_zone_sizing(zone, 12.8, 40.0)

        setpoint_mgr_single_zone_reheat = openstudio.model.SetpointManagerSingleZoneReheat(model)
        setpoint_mgr_single_zone_reheat.setControlZone(zone)

        fan = _add_psz_fan(model, f"{loop_name} Fan", fan_type, hvac_op_sch)

        htg_coil = None
        if heating_type == 'Gas':
            htg_coil = openstudio.model.CoilHeatingGas(model, always_on)
            htg_coil.setName(f"{loop_name} Gas Htg Coil")
            if template_name(standard) == Template.DOE_REF_PRE_1980.value:
                htg_coil.setGasBurnerEfficiency(0.78)
        elif heating_type == 'Water':
            htg_coil = add_water_heating_coil(
                model, f"{loop_name} Water Htg Coil", hot_water_loop,
                hw_temp_c, hw_delta_t_k, f_to_c(PREHEAT_SA_TEMP_F), f_to_c(HTG_SA_TEMP_F)
            )
        elif heating_type == 'Single Speed Heat Pump':
            htg_coil = add_hp_heating_coil(model, f"{loop_name} HP Htg Coil", with_defrost=True)
        elif heating_type == 'Water To Air Heat Pump':
            htg_coil = add_wahp_heating_coil(model, f"{loop_name} Water-to-Air HP Htg Coil", hot_water_loop)

        supplemental_htg_coil = None
        if supplemental_heating_type == 'Electric':
            supplemental_htg_coil = openstudio.model.CoilHeatingElectric(model, always_on)
            supplemental_htg_coil.setName(f"{loop_name} Electric Backup Htg Coil")
        elif supplemental_heating_type == 'Gas':
            supplemental_htg_coil = openstudio.model.CoilHeatingGas(model, always_on)
            supplemental_htg_coil.setName(f"{loop_name} Gas Backup Htg Coil")

        clg_coil = None
        if cooling_type == 'Water':
            clg_coil = openstudio.model.CoilCoolingWater(model, always_on)
            clg_coil.setName(f"{loop_name} Water Clg Coil")
            chilled_water_loop.addDemandBranchForComponent(clg_coil)
        elif cooling_type == 'Two Speed DX AC':
            clg_coil = add_dx_cooling_coil_two_speed(model, f"{loop_name} 2spd DX AC Clg Coil")
        elif cooling_type == 'Single Speed DX AC':
            clg_coil = add_dx_cooling_coil_single_speed(model, f"{loop_name} 1spd DX AC Clg Coil", 'PSZ DX Clg')
        elif cooling_type == 'Single Speed Heat Pump':
            clg_coil = add_dx_cooling_coil_single_speed(model, f"{loop_name} 1spd DX HP Clg Coil", 'HP Clg')
        elif cooling_type == 'Water To Air Heat Pump':
            clg_coil = add_wahp_cooling_coil(model, f"{loop_name} Water-to-Air HP Clg Coil", chilled_water_loop)

        oa_controller = openstudio.model.ControllerOutdoorAir(model)
        oa_controller.setName(f"{loop_name} OA Sys Controller")
        oa_controller.setMinimumOutdoorAirSchedule(oa_damper_sch)
        oa_controller.setHeatRecoveryBypassControlType('BypassWhenOAFlowGreaterThanMinimum')
        oa_system = openstudio.model.AirLoopHVACOutdoorAirSystem(model, oa_controller)
        oa_system.setName(f"{loop_name} OA Sys")

        # components are added closest to the zone first
        supply_inlet_node = air_loop.supplyInletNode()
        if fan_type == 'Cycling':
            if heating_type == 'Water To Air Heat Pump':
                unitary_system = openstudio.model.AirLoopHVACUnitarySystem(model)
                unitary_system.setSupplyFan(fan)
                if htg_coil is not None:
                    unitary_system.setHeatingCoil(htg_coil)
                if clg_coil is not None:
                    unitary_system.setCoolingCoil(clg_coil)
                if supplemental_htg_coil is not None:
                    unitary_system.setSupplementalHeatingCoil(supplemental_htg_coil)
                unitary_system.setName(f"{zone_name} Unitary HP")
                unitary_system.setControllingZoneorThermostatLocation(zone)
                unitary_system.setMaximumSupplyAirTemperature(50)
                unitary_system.setFanPlacement('BlowThrough')
                unitary_system.setSupplyAirFlowRateMethodDuringCoolingOperation('SupplyAirFlowRate')
                unitary_system.setSupplyAirFlowRateMethodDuringHeatingOperation('SupplyAirFlowRate')
                unitary_system.setSupplyAirFlowRateMethodWhenNoCoolingorHeatingisRequired('SupplyAirFlowRate')
                unitary_system.setSupplyAirFanOperatingModeSchedule(always_on)
                unitary_system.addToNode(supply_inlet_node)
                setpoint_mgr_single_zone_reheat.setMaximumSupplyAirTemperature(50)
            else:
                unitary_system = openstudio.model.AirLoopHVACUnitaryHeatPumpAirToAir(
                    model, always_on, fan, htg_coil, clg_coil, supplemental_htg_coil
                )
                unitary_system.setName(f"{loop_name} Unitary HP")
                unitary_system.setControllingZone(zone)
                unitary_system.setMaximumOutdoorDryBulbTemperatureforSupplementalHeaterOperation(f_to_c(40.0))
                unitary_system.setFanPlacement(fan_location)
                unitary_system.setSupplyAirFanOperatingModeSchedule(hvac_op_sch)
                unitary_system.addToNode(supply_inlet_node)
                setpoint_mgr_single_zone_reheat.setMinimumSupplyAirTemperature(f_to_c(55.0))
                setpoint_mgr_single_zone_reheat.setMaximumSupplyAirTemperature(f_to_c(104.0))
        else:
            if fan_location == 'DrawThrough':
                components = (fan, supplemental_htg_coil, htg_coil, clg_coil)
            else:
                components = (supplemental_htg_coil, clg_coil, htg_coil, fan)
            for component in components:
                if component is not None:
                    component.addToNode(supply_inlet_node)
            setpoint_mgr_single_zone_reheat.setMinimumSupplyAirTemperature(f_to_c(50.0))
            setpoint_mgr_single_zone_reheat.setMaximumSupplyAirTemperature(f_to_c(122.0))

        oa_system.addToNode(supply_inlet_node)
        setpoint_mgr_single_zone_reheat.addToNode(air_loop.supplyOutletNode())
        air_loop.setNightCycleControlType('CycleOnAny')
        add_diffuser(model, air_loop, zone, f"{loop_name} Diffuser")

    logger.info(f"Added {len(air_loops)} PSZ-AC systems.")
    return air_loops


def add_data_center_hvac(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    hot_water_loop: openstudio.model.PlantLoop | None,
    heat_pump_loop: openstudio.model.PlantLoop,
    thermal_zones: list[openstudio.model.ThermalZone],
    hvac_op_sch: str | None,
    oa_damper_sch: str | None,
    main_data_center: bool = False
) -> list[openstudio.model.AirLoopHVAC]:
    """Creates a packaged single zone water-to-air heat pump on
    `heat_pump_loop` for each zone in `thermal_zones`.

    The main data center also gets an electric and a hot water heating coil
    from `hot_water_loop`, an electric steam humidifier controlled to the
    zone's minimum humidity, and a humidistat.
    """
    if heat_pump_loop is None:
        logger.error('No heat pump loop supplied, cannot add data center HVAC.')
        return []
    if main_data_center and hot_water_loop is None:
        logger.error('No hot water plant loop supplied, cannot add main data center HVAC.')
        return []

    hw_temp_c, hw_delta_t_k = hot_water_conditions()
    hvac_op_sch = add_schedule(model, hvac_op_sch)
    oa_damper_sch = add_schedule(model, oa_damper_sch)
    always_on = model.alwaysOnDiscreteSchedule()

    air_loops = []
    for zone in thermal_zones:
        zone_name = zone.nameString()
        logger.info(f"Adding data center HVAC for {zone_name}.")

        air_loop = openstudio.model.AirLoopHVAC(model)
        air_loop.setName(f"{zone_name} {sys_name or 'PSZ-AC Data Center'}")
        air_loop.setAvailabilitySchedule(hvac_op_sch)
        loop_name = air_loop.nameString()
        air_loops.append(air_loop)

        apply_single_zone_system_sizing(air_loop)
        apply_zone_sizing(zone, 12.8, 40.0)

        setpoint_mgr_single_zone_reheat = openstudio.model.SetpointManagerSingleZoneReheat(model)
        setpoint_mgr_single_zone_reheat.setControlZone(zone)

        fan = _add_psz_fan(model, f"{loop_name} Fan", 'Cycling', hvac_op_sch)
        htg_coil = add_wahp_heating_coil(model, f"{loop_name} Water-to-Air HP Htg Coil", heat_pump_loop)
        clg_coil = add_wahp_cooling_coil(model, f"{loop_name} Water-to-Air HP Clg Coil", heat_pump_loop)
        supplemental_htg_coil = openstudio.model.CoilHeatingElectric(model, always_on)
        supplemental_htg_coil.setName(f"{loop_name} Electric Backup Htg Coil")

        oa_controller = openstudio.model.ControllerOutdoorAir(model)
        oa_controller.setName(f"{loop_name} OA Sys Controller")
        oa_controller.setMinimumOutdoorAirSchedule(oa_damper_sch)
        oa_system = openstudio.model.AirLoopHVACOutdoorAirSystem(model, oa_controller)
        oa_system.setName(f"{loop_name} OA Sys")

        supply_inlet_node = air_loop.supplyInletNode()
        if main_data_center:
            humidifier = openstudio.model.HumidifierSteamElectric(model)
            humidifier.setRatedCapacity(HUMIDIFIER_RATED_CAPACITY)
            humidifier.setRatedPower(HUMIDIFIER_RATED_POWER)
            humidifier.setName(f"{loop_name} Electric Steam Humidifier")

            extra_elec_htg_coil = openstudio.model.CoilHeatingElectric(model, always_on)
            extra_elec_htg_coil.setName(f"{loop_name} Electric Htg Coil")

            extra_water_htg_coil = add_water_heating_coil(
                model, f"{loop_name} Water Htg Coil", hot_water_loop,
                hw_temp_c, hw_delta_t_k, f_to_c(PREHEAT_SA_TEMP_F), f_to_c(HTG_SA_TEMP_F)
            )
            extra_water_htg_coil.addToNode(supply_inlet_node)
            extra_elec_htg_coil.addToNode(supply_inlet_node)
            humidifier.addToNode(supply_inlet_node)

            humidity_spm = openstudio.model.SetpointManagerSingleZoneHumidityMinimum(model)
            humidity_spm.setControlZone(zone)
            humidity_spm.addToNode(outlet_node(humidifier))

            humidistat = openstudio.model.ZoneControlHumidistat(model)
            humidistat.setHumidifyingRelativeHumiditySetpointSchedule(add_schedule(model, DC_MIN_RH_SCHEDULE))
            zone.setZoneControlHumidistat(humidistat)

        unitary_system = openstudio.model.AirLoopHVACUnitarySystem(model)
        unitary_system.setSupplyFan(fan)
        unitary_system.setHeatingCoil(htg_coil)
        unitary_system.setCoolingCoil(clg_coil)
        unitary_system.setSupplementalHeatingCoil(supplemental_htg_coil)
        unitary_system.setName(f"{zone_name} Unitary HP")
        unitary_system.setControllingZoneorThermostatLocation(zone)
        unitary_system.setMaximumOutdoorDryBulbTemperatureforSupplementalHeaterOperation(f_to_c(40.0))
        unitary_system.setFanPlacement('BlowThrough')
        unitary_system.setSupplyAirFanOperatingModeSchedule(always_on)
        unitary_system.addToNode(supply_inlet_node)

        setpoint_mgr_single_zone_reheat.setMinimumSupplyAirTemperature(f_to_c(55.0))
        setpoint_mgr_single_zone_reheat.setMaximumSupplyAirTemperature(f_to_c(104.0))

        oa_system.addToNode(supply_inlet_node)
        setpoint_mgr_single_zone_reheat.addToNode(air_loop.supplyOutletNode())
        air_loop.setNightCycleControlType('CycleOnAny')
        add_diffuser(model, air_loop, zone, f"{loop_name} Diffuser")

    return air_loops

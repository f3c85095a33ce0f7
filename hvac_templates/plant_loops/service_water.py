"""Service water heating: the service water loop with its water heater, an
optional booster loop, and the water use equipment at the fixtures.
"""
import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import (
    Q_,
    Template,
    f_to_c,
    c_to_f,
    delta_f_to_k,
    add_loop_pipes,
    add_constant_schedule_ruleset,
    add_temperature_type_limits,
    add_schedule,
    add_pump
)
from hvac_templates.standards.data import StandardsData

logger = ModuleLogger.get_logger(__name__)

SWH_DELTA_T_R = 9.0
WATER_HEATER_AMBIENT_TEMP_F = 70.0
WATER_HEATER_MAX_TEMP_F = 180.0
WATER_HEATER_DEADBAND_R = 3.6
FRACTION_SENSIBLE = 0.2
FRACTION_LATENT = 0.05

# OpenStudio fuel type, thermal efficiency, loss coefficient to ambient (W/K)
WATER_HEATER_FUELS = {
    'Electricity': ('Electricity', 1.0, 1.053),
    'Natural Gas': ('NaturalGas', 0.78, 6.0)
}
BOOSTER_GAS_EFFICIENCY = 0.8


def _add_swh_temp_schedule(
    model: openstudio.model.Model,
    temp_c: float,
    name: str
) -> openstudio.model.ScheduleRuleset:
    return add_constant_schedule_ruleset(
        model, temp_c, name, type_limits=add_temperature_type_limits(model)
    )


def _configure_water_heater(
    model: openstudio.model.Model,
    water_heater: openstudio.model.WaterHeaterMixed,
    water_heater_capacity: float,
    water_heater_fuel: str,
    parasitic_fuel_consumption_rate: float,
    thermal_zone: openstudio.model.ThermalZone | None,
    gas_efficiency: float | None = None
) -> None:
    # ambient conditions, controls and fuel shared by main and booster heaters
    if thermal_zone is None:
        ambient_sch = _add_swh_temp_schedule(
            model, f_to_c(WATER_HEATER_AMBIENT_TEMP_F),
            f"Water Heater Ambient Temp Schedule - {WATER_HEATER_AMBIENT_TEMP_F:g}F"
        )
        water_heater.setAmbientTemperatureIndicator('Schedule')
        water_heater.setAmbientTemperatureSchedule(ambient_sch)
    else:
        water_heater.setAmbientTemperatureIndicator('ThermalZone')
        water_heater.setAmbientTemperatureThermalZone(thermal_zone)
    water_heater.setMaximumTemperatureLimit(f_to_c(WATER_HEATER_MAX_TEMP_F))
    water_heater.setDeadbandTemperatureDifference(delta_f_to_k(WATER_HEATER_DEADBAND_R))
    water_heater.setHeaterControlType('Cycle')
    water_heater.setHeaterMaximumCapacity(water_heater_capacity)
    water_heater.setOffCycleParasiticHeatFractiontoTank(0.8)
    water_heater.setIndirectWaterHeatingRecoveryTime(1.5)

    if water_heater_fuel not in WATER_HEATER_FUELS:
        logger.warning(
            f"Water heater fuel '{water_heater_fuel}' is not recognized; "
            f"the fuel and efficiency of '{water_heater.nameString()}' are left "
            f"at their defaults."
        )
        return
    fuel_type, efficiency, loss_coefficient = WATER_HEATER_FUELS[water_heater_fuel]
    if fuel_type == 'NaturalGas' and gas_efficiency is not None:
        efficiency = gas_efficiency
    water_heater.setHeaterFuelType(fuel_type)
    water_heater.setHeaterThermalEfficiency(efficiency)
    water_heater.setOffCycleParasiticFuelConsumptionRate(parasitic_fuel_consumption_rate)
    water_heater.setOnCycleParasiticFuelConsumptionRate(parasitic_fuel_consumption_rate)
    water_heater.setOffCycleParasiticFuelType(fuel_type)
    water_heater.setOnCycleParasiticFuelType(fuel_type)
    water_heater.setOffCycleLossCoefficienttoAmbientTemperature(loss_coefficient)
    water_heater.setOnCycleLossCoefficienttoAmbientTemperature(loss_coefficient)


def add_water_heater(
    model: openstudio.model.Model,
    standard: str | Template,
    water_heater_capacity: float,
    water_heater_volume: float,
    water_heater_fuel: str,
    service_water_temperature: float,
    parasitic_fuel_consumption_rate: float,
    swh_temp_sch: openstudio.model.Schedule | None,
    set_peak_use_flowrate: bool,
    peak_flowrate: float,
    flowrate_schedule: str | None,
    water_heater_thermal_zone: openstudio.model.ThermalZone | None,
    building_type: str | None = None
) -> openstudio.model.WaterHeaterMixed:
    """Creates a mixed water heater. The heater is not connected to a loop.

    Parameters
    ----------
    model:
        The building model.
    standard:
        Code vintage.
    water_heater_capacity:
        Heating capacity in W.
    water_heater_volume:
        Tank volume in m3.
    water_heater_fuel:
        'Electricity' or 'Natural Gas'.
    service_water_temperature:
        Setpoint temperature in °C, used when `swh_temp_sch` is None.
    parasitic_fuel_consumption_rate:
        Parasitic fuel consumption in W, on and off cycle.
    swh_temp_sch:
        Setpoint temperature schedule.
    set_peak_use_flowrate:
        If True, the heater gets its own use flow rate (stand-alone heaters
        that are not on a loop).
    peak_flowrate:
        Peak use flow rate in m3/s.
    flowrate_schedule:
        Name of the use flow rate fraction schedule.
    water_heater_thermal_zone:
        Zone the tank stands in. If None, the tank loses heat to 70 °F air.
    building_type:
        Not used by this builder.
    """
    logger.info("Adding water heater.")
    capacity_kbtu_per_hr = Q_(water_heater_capacity, 'W').to('kBtu/hr').m
    volume_gal = Q_(water_heater_volume, 'm**3').to('gallon').m

    if swh_temp_sch is None:
        swh_temp_f = c_to_f(service_water_temperature)
        swh_temp_sch = _add_swh_temp_schedule(
            model, service_water_temperature,
            f"Service Water Loop Temp - {round(swh_temp_f)}F"
        )

    water_heater = openstudio.model.WaterHeaterMixed(model)
    water_heater.setName(
        f"{volume_gal:.0f}gal {water_heater_fuel} Water Heater - "
        f"{round(capacity_kbtu_per_hr)}kBtu/hr"
    )
    water_heater.setTankVolume(water_heater_volume)
    water_heater.setSetpointTemperatureSchedule(swh_temp_sch)
    _configure_water_heater(
        model, water_heater, water_heater_capacity, water_heater_fuel,
        parasitic_fuel_consumption_rate, water_heater_thermal_zone
    )

    if set_peak_use_flowrate:
        water_heater.setPeakUseFlowRate(peak_flowrate)
        water_heater.setUseFlowRateFractionSchedule(add_schedule(model, flowrate_schedule))
    return water_heater


def add_swh_loop(
    model: openstudio.model.Model,
    standard: str | Template,
    sys_name: str | None,
    water_heater_thermal_zone: openstudio.model.ThermalZone | None,
    service_water_temperature: float,
    service_water_pump_head: float | None,
    service_water_pump_motor_efficiency: float | None,
    water_heater_capacity: float,
    water_heater_volume: float,
    water_heater_fuel: str,
    parasitic_fuel_consumption_rate: float,
    building_type: str | None = None
) -> openstudio.model.PlantLoop:
    """Creates a service water loop with a constant speed circulation pump
    and one mixed water heater.

    Parameters
    ----------
    service_water_temperature:
        Supply temperature in °C.
    service_water_pump_head:
        Pump head in Pa. If None, the loop has no circulation pump to speak
        of: the head becomes 0.001 Pa and the motor efficiency 1.
    service_water_pump_motor_efficiency:
        Motor efficiency of the pump as a fraction.

    The remaining parameters are passed on to `add_water_heater()`.
    """
    logger.info("Adding service water loop.")
    service_water_loop = openstudio.model.PlantLoop(model)
    service_water_loop.setMinimumLoopTemperature(10)
    service_water_loop.setMaximumLoopTemperature(60)
    service_water_loop.setName(sys_name or 'Service Water Loop')

    swh_temp_c = service_water_temperature
    swh_temp_f = c_to_f(swh_temp_c)
    swh_temp_sch = _add_swh_temp_schedule(
        model, swh_temp_c, f"Service Water Loop Temp - {round(swh_temp_f)}F"
    )
    manager = openstudio.model.SetpointManagerScheduled(model, swh_temp_sch)
    manager.setName('Service hot water setpoint manager')
    manager.addToNode(service_water_loop.supplyOutletNode())

    sizing_plant = service_water_loop.sizingPlant()
    sizing_plant.setLoopType('Heating')
    sizing_plant.setDesignLoopExitTemperature(swh_temp_c)
    sizing_plant.setLoopDesignTemperatureDifference(delta_f_to_k(SWH_DELTA_T_R))

    pump_head_pa = service_water_pump_head
    pump_motor_efficiency = service_water_pump_motor_efficiency
    if pump_head_pa is None:
        pump_head_pa = 0.001
        pump_motor_efficiency = 1.0
    if pump_motor_efficiency is None:
        pump_motor_efficiency = 1.0
    swh_pump = openstudio.model.PumpConstantSpeed(model)
    swh_pump.setName('Service Water Loop Pump')
    swh_pump.setRatedPumpHead(float(pump_head_pa))
    swh_pump.setMotorEfficiency(pump_motor_efficiency)
    swh_pump.setPumpControlType('Intermittent')
    swh_pump.addToNode(service_water_loop.supplyInletNode())

    water_heater = add_water_heater(
        model, standard,
        water_heater_capacity,
        water_heater_volume,
        water_heater_fuel,
        service_water_temperature,
        parasitic_fuel_consumption_rate,
        swh_temp_sch,
        False,
        0.0,
        None,
        water_heater_thermal_zone,
        building_type
    )
    service_water_loop.addSupplyBranchForComponent(water_heater)

    add_loop_pipes(model, service_water_loop)
    return service_water_loop


def add_swh_booster(
    model: openstudio.model.Model,
    standard: str | Template,
    main_service_water_loop: openstudio.model.PlantLoop,
    water_heater_capacity: float,
    water_heater_volume: float,
    water_heater_fuel: str,
    booster_water_temperature: float,
    parasitic_fuel_consumption_rate: float,
    booster_water_heater_thermal_zone: openstudio.model.ThermalZone | None,
    building_type: str | None = None
) -> openstudio.model.PlantLoop:
    """Creates a booster loop that raises water taken from
    `main_service_water_loop` to `booster_water_temperature` (°C). The two
    loops are coupled by an ideal fluid-to-fluid heat exchanger on the demand
    side of the main loop.
    """
    logger.info(f"Adding booster water heater to {main_service_water_loop.nameString()}.")
    booster_loop = openstudio.model.PlantLoop(model)
    booster_loop.setName('Booster Service Water Loop')

    swh_temp_c = booster_water_temperature
    swh_temp_f = c_to_f(swh_temp_c)
    swh_temp_sch = _add_swh_temp_schedule(
        model, swh_temp_c, f"Service Water Booster Temp - {round(swh_temp_f)}F"
    )
    manager = openstudio.model.SetpointManagerScheduled(model, swh_temp_sch)
    manager.setName('Hot water booster setpoint manager')
    manager.addToNode(booster_loop.supplyOutletNode())

    sizing_plant = booster_loop.sizingPlant()
    sizing_plant.setLoopType('Heating')
    sizing_plant.setDesignLoopExitTemperature(swh_temp_c)
    sizing_plant.setLoopDesignTemperatureDifference(delta_f_to_k(SWH_DELTA_T_R))

    # no real circulation pump
    swh_pump = add_pump(model, 'Booster Water Loop Pump', 0.0, variable_speed=False, motor_efficiency=1.0)
    swh_pump.addToNode(booster_loop.supplyInletNode())

    capacity_kbtu_per_hr = Q_(water_heater_capacity, 'W').to('kBtu/hr').m
    volume_gal = Q_(water_heater_volume, 'm**3').to('gallon').m
    water_heater = openstudio.model.WaterHeaterMixed(model)
    water_heater.setName(
        f"{volume_gal:.0f}gal {water_heater_fuel} Booster Water Heater - "
        f"{round(capacity_kbtu_per_hr)}kBtu/hr"
    )
    water_heater.setTankVolume(water_heater_volume)
    water_heater.setSetpointTemperatureSchedule(swh_temp_sch)
    _configure_water_heater(
        model, water_heater, water_heater_capacity, water_heater_fuel,
        parasitic_fuel_consumption_rate, booster_water_heater_thermal_zone,
        gas_efficiency=BOOSTER_GAS_EFFICIENCY
    )
    booster_loop.addSupplyBranchForComponent(water_heater)

    add_loop_pipes(model, booster_loop)

    hx = openstudio.model.HeatExchangerFluidToFluid(model)
    hx.setName('HX for Booster Water Heating')
    hx.setHeatExchangeModelType('Ideal')
    hx.setControlType('UncontrolledOn')
    hx.setHeatTransferMeteringEndUseType('LoopToLoop')
    hx.addToNode(booster_loop.supplyInletNode())
    main_service_water_loop.addDemandBranchForComponent(hx)
    return booster_loop


def _add_water_use(
    model: openstudio.model.Model,
    swh_loop: openstudio.model.PlantLoop,
    definition_name: str,
    equipment_name: str,
    peak_flowrate: float,
    target_temp_c: float,
    flowrate_schedule: openstudio.model.Schedule,
    target_temp_sch_name: str | None = None,
    heat_gains: bool = True
) -> openstudio.model.WaterUseEquipment:
    # one fixture behind its own water use connection
    swh_connection = openstudio.model.WaterUseConnections(model)
    definition = openstudio.model.WaterUseEquipmentDefinition(model)
    definition.setName(definition_name)
    definition.setPeakFlowRate(peak_flowrate)
    if heat_gains:
        definition.setSensibleFractionSchedule(add_constant_schedule_ruleset(
            model, FRACTION_SENSIBLE, f"Fraction Sensible - {FRACTION_SENSIBLE}"
        ))
        definition.setLatentFractionSchedule(add_constant_schedule_ruleset(
            model, FRACTION_LATENT, f"Fraction Latent - {FRACTION_LATENT}"
        ))
    target_temp_sch_name = target_temp_sch_name or (
        f"Mixed Water At Faucet Temp - {round(c_to_f(target_temp_c))}F"
    )
    definition.setTargetTemperatureSchedule(
        add_constant_schedule_ruleset(model, target_temp_c, target_temp_sch_name)
    )
    water_fixture = openstudio.model.WaterUseEquipment(definition)
    water_fixture.setName(equipment_name)
    water_fixture.setFlowRateFractionSchedule(flowrate_schedule)
    swh_connection.addWaterUseEquipment(water_fixture)
    swh_loop.addDemandBranchForComponent(swh_connection)
    return water_fixture


def add_swh_end_uses(
    model: openstudio.model.Model,
    standard: str | Template,
    use_name: str,
    swh_loop: openstudio.model.PlantLoop,
    peak_flowrate: float,
    flowrate_schedule: str | None,
    water_use_temperature: float,
    space_name: str | None,
    building_type: str | None = None
) -> openstudio.model.WaterUseEquipment:
    """Adds a water use fixture to `swh_loop`.

    Parameters
    ----------
    use_name:
        Kind of use, e.g. 'Main' or 'Dishwashing'; used in the names.
    peak_flowrate:
        Peak flow rate in m3/s.
    flowrate_schedule:
        Name of the flow rate fraction schedule.
    water_use_temperature:
        Temperature at the fixture (mixed water) in °C.
    space_name:
        If given, the fixture is placed in this space and named after it.
    """
    logger.info(f"Adding water fixture to {swh_loop.nameString()}.")
    flow_gpm = Q_(peak_flowrate, 'm**3/s').to('gallon/minute').m
    base_name = space_name if space_name is not None else use_name
    water_fixture = _add_water_use(
        model, swh_loop,
        definition_name=f"{use_name.capitalize()} Service Water Use Def {round(flow_gpm, 2)}gal/min",
        equipment_name=f"{base_name.capitalize()} Service Water Use {round(flow_gpm, 2)}gal/min",
        peak_flowrate=peak_flowrate,
        target_temp_c=water_use_temperature,
        flowrate_schedule=add_schedule(model, flowrate_schedule)
    )
    if space_name is not None:
        space = model.getSpaceByName(space_name)
        if space.is_initialized():
            water_fixture.setSpace(space.get())
        else:
            logger.warning(f"Space '{space_name}' not found; '{water_fixture.nameString()}' has no space.")
    return water_fixture


def add_swh_end_uses_by_space(
    model: openstudio.model.Model,
    building_type: str,
    building_vintage: str | Template,
    climate_zone: str,
    swh_loop: openstudio.model.PlantLoop,
    space_type_name: str,
    space_name: str,
    space_multiplier: float | None = None
) -> openstudio.model.WaterUseEquipment | None:
    """Adds a water use fixture for space `space_name` to `swh_loop`. The
    peak flow per unit floor area (gal/h per ft2), the target temperature and
    the flow fraction schedule are looked up in the space type table of
    `StandardsData`. Returns None if the table has no row for the space type,
    if the row has no service water data, or if the model has no space
    `space_name`.
    """
    criteria = {
        'template': str(building_vintage),
        'building_type': building_type,
        'space_type': space_type_name
    }
    data = StandardsData.find_object('space_types', criteria)
    if data is None:
        logger.error(
            f"No space type data for {building_vintage}-{building_type}-"
            f"{space_type_name}; no service water use added for '{space_name}'."
        )
        return None
    peak_flow_per_area = data['service_water_heating_peak_flow_per_area']
    target_temp_c = data['service_water_heating_target_temperature']
    if peak_flow_per_area is None or target_temp_c is None:
        logger.warning(
            f"Space type {space_type_name} of {building_type} has no service water "
            f"use; no service water use added for '{space_name}'."
        )
        return None
    space = model.getSpaceByName(space_name)
    if not space.is_initialized():
        logger.error(f"Space '{space_name}' not found; no service water use added.")
        return None
    space = space.get()
    logger.debug(f"Service water use of '{space_name}' in climate zone {climate_zone}.")

    space_area_ft2 = Q_(space.floorArea(), 'm**2').to('ft**2').m
    multiplier = space_multiplier if space_multiplier is not None else 1
    flow_gph = float(peak_flow_per_area) * space_area_ft2 * multiplier
    flow_gpm = flow_gph / 60.0
    peak_flowrate = Q_(flow_gpm, 'gallon/minute').to('m**3/s').m

    return _add_water_use(
        model, swh_loop,
        definition_name=f"{space_name.capitalize()} Service Water Use Def {round(flow_gpm, 2)}gal/min",
        equipment_name=f"{space_name.capitalize()} Service Water Use {round(flow_gpm, 2)}gal/min",
        peak_flowrate=peak_flowrate,
        target_temp_c=float(target_temp_c),
        flowrate_schedule=add_schedule(model, data['service_water_heating_schedule'])
    )


def add_booster_swh_end_uses(
    model: openstudio.model.Model,
    standard: str | Template,
    swh_booster_loop: openstudio.model.PlantLoop,
    peak_flowrate: float,
    flowrate_schedule: str | None,
    water_use_temperature: float,
    building_type: str | None = None
) -> openstudio.model.WaterUseEquipment:
    """Adds the fixture served by a booster loop. Booster fixtures (e.g.
    dishwasher rinse) give no heat gains to the space.

    `peak_flowrate` is in m3/s and `water_use_temperature` in °C.
    """
    logger.info(f"Adding water fixture to {swh_booster_loop.nameString()}.")
    flow_gpm = Q_(peak_flowrate, 'm**3/s').to('gallon/minute').m
    temp_f = c_to_f(water_use_temperature)
    return _add_water_use(
        model, swh_booster_loop,
        definition_name=f"Water Fixture Def - {round(flow_gpm, 2)} gal/min",
        equipment_name=f"Booster Water Fixture - {round(flow_gpm, 2)} gal/min at {round(temp_f)}F",
        peak_flowrate=peak_flowrate,
        target_temp_c=water_use_temperature,
        flowrate_schedule=add_schedule(model, flowrate_schedule),
        heat_gains=False
    )

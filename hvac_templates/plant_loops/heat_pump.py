import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import (
    f_to_c,
    delta_f_to_k,
    add_loop_pipes,
    add_constant_schedule_ruleset,
    add_pump,
    outlet_node
)

logger = ModuleLogger.get_logger(__name__)

HP_HIGH_TEMP_F = 65.0   # supplemental heating below
HP_LOW_TEMP_F = 41.0    # supplemental cooling above
HP_TEMP_SIZING_F = 102.2
HP_DELTA_T_R = 19.8


def _add_dual_setpoint(model, node, high_sch, low_sch):
    manager = openstudio.model.SetpointManagerScheduledDualSetpoint(model)
    manager.setHighSetpointSchedule(high_sch)
    manager.setLowSetpointSchedule(low_sch)
    manager.addToNode(node)
    return manager


def add_hp_loop(
    model: openstudio.model.Model,
    building_type: str | None = None
) -> openstudio.model.PlantLoop:
    """Creates the water loop that serves water-to-air heat pumps. The loop
    floats between 41 °F and 65 °F. Heat is rejected by a two-speed cooling
    tower (large offices) or an evaporative fluid cooler (all other
    buildings), and heat is added by a gas boiler.
    """
    logger.info("Adding heat pump loop.")
    heat_pump_water_loop = openstudio.model.PlantLoop(model)
    heat_pump_water_loop.setName('Heat Pump Loop')
    heat_pump_water_loop.setMaximumLoopTemperature(80)
    heat_pump_water_loop.setMinimumLoopTemperature(5)
    loop_name = heat_pump_water_loop.nameString()

    hp_high_temp_sch = add_constant_schedule_ruleset(
        model, f_to_c(HP_HIGH_TEMP_F), f"Heat Pump Loop High Temp - {HP_HIGH_TEMP_F:g}F"
    )
    hp_low_temp_sch = add_constant_schedule_ruleset(
        model, f_to_c(HP_LOW_TEMP_F), f"Heat Pump Loop Low Temp - {HP_LOW_TEMP_F:g}F"
    )
    _add_dual_setpoint(
        model, heat_pump_water_loop.supplyOutletNode(),
        hp_high_temp_sch, hp_low_temp_sch
    )

    sizing_plant = heat_pump_water_loop.sizingPlant()
    sizing_plant.setLoopType('Heating')
    sizing_plant.setDesignLoopExitTemperature(f_to_c(HP_TEMP_SIZING_F))
    sizing_plant.setLoopDesignTemperatureDifference(delta_f_to_k(HP_DELTA_T_R))

    pump = add_pump(model, 'Heat Pump Loop Pump', 60.0, variable_speed=False)
    pump.addToNode(heat_pump_water_loop.supplyInletNode())

    if building_type == 'LargeOffice':
        cooling_tower = openstudio.model.CoolingTowerTwoSpeed(model)
        cooling_tower.setName(f"{loop_name} Central Tower")
        heat_pump_water_loop.addSupplyBranchForComponent(cooling_tower)
        _add_dual_setpoint(model, outlet_node(cooling_tower), hp_high_temp_sch, hp_low_temp_sch)
    else:
        fluid_cooler = openstudio.model.EvaporativeFluidCoolerSingleSpeed(model)
        fluid_cooler.setName(f"{loop_name} Sup Cooling Tower")
        fluid_cooler.setDesignSprayWaterFlowRate(0.002208)
        fluid_cooler.setPerformanceInputMethod('UFactorTimesAreaAndDesignWaterFlowRate')
        heat_pump_water_loop.addSupplyBranchForComponent(fluid_cooler)

    boiler = openstudio.model.BoilerHotWater(model)
    boiler.setName(f"{loop_name} Sup Boiler")
    boiler.setFuelType('NaturalGas')
    boiler.setMinimumPartLoadRatio(0)
    boiler.setMaximumPartLoadRatio(1.2)
    boiler.setOptimumPartLoadRatio(1)
    boiler.setBoilerFlowMode('ConstantFlow')
    heat_pump_water_loop.addSupplyBranchForComponent(boiler)
    _add_dual_setpoint(model, outlet_node(boiler), hp_high_temp_sch, hp_low_temp_sch)

    add_loop_pipes(model, heat_pump_water_loop)
    return heat_pump_water_loop

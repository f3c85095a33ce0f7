import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import (
    f_to_c,
    delta_f_to_k,
    add_loop_pipes,
    add_scheduled_setpoint,
    add_pump,
    create_curve
)

logger = ModuleLogger.get_logger(__name__)

CW_TEMP_F = 70.0
CW_TEMP_SIZING_F = 85.0
CW_DELTA_T_R = 10.0
CW_APPROACH_DELTA_T_R = 7.0
CW_PUMP_HEAD_FT_H2O = 49.7
CW_PUMP_CURVE = (0.0, 0.0216, -0.0325, 1.0095)


def add_cw_loop(
    model: openstudio.model.Model,
    number_cooling_towers: int = 1
) -> openstudio.model.PlantLoop:
    """Creates a condenser water loop with `number_cooling_towers` variable
    speed cooling towers in parallel. The towers share one cubic fan power
    curve.
    """
    logger.info("Adding condenser water loop.")
    condenser_water_loop = openstudio.model.PlantLoop(model)
    condenser_water_loop.setName('Condenser Water Loop')
    condenser_water_loop.setMaximumLoopTemperature(80)
    condenser_water_loop.setMinimumLoopTemperature(5)

    cw_delta_t_k = delta_f_to_k(CW_DELTA_T_R)
    cw_approach_delta_t_k = delta_f_to_k(CW_APPROACH_DELTA_T_R)

    add_scheduled_setpoint(
        model, condenser_water_loop.supplyOutletNode(), f_to_c(CW_TEMP_F),
        schedule_name=f"Condenser Water Loop Temp - {CW_TEMP_F:g}F"
    )

    sizing_plant = condenser_water_loop.sizingPlant()
    sizing_plant.setLoopType('Condenser')
    sizing_plant.setDesignLoopExitTemperature(f_to_c(CW_TEMP_SIZING_F))
    sizing_plant.setLoopDesignTemperatureDifference(cw_delta_t_k)

    pump = add_pump(
        model, 'Condenser Water Loop Pump', CW_PUMP_HEAD_FT_H2O,
        part_load_coefficients=CW_PUMP_CURVE
    )
    pump.addToNode(condenser_water_loop.supplyInletNode())

    fan_curve = create_curve(model, 'Cooling Tower Fan Power', name='Cooling Tower Fan Curve')
    for i in range(number_cooling_towers):
        cooling_tower = openstudio.model.CoolingTowerVariableSpeed(model)
        cooling_tower.setName(f"{condenser_water_loop.nameString()} Cooling Tower {i}")
        cooling_tower.setDesignApproachTemperature(cw_approach_delta_t_k)
        cooling_tower.setDesignRangeTemperature(cw_delta_t_k)
        cooling_tower.setFanPowerRatioFunctionofAirFlowRateRatioCurve(fan_curve)
        cooling_tower.setMinimumAirFlowRateRatio(0.2)
        cooling_tower.setFractionofTowerCapacityinFreeConvectionRegime(0.125)
        cooling_tower.setNumberofCells(2)
        cooling_tower.setCellControl('MaximalCell')
        condenser_water_loop.addSupplyBranchForComponent(cooling_tower)

    add_loop_pipes(model, condenser_water_loop)
    return condenser_water_loop

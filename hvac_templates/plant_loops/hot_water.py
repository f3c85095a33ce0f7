import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import (
    f_to_c,
    delta_f_to_k,
    add_loop_pipes,
    add_scheduled_setpoint,
    add_pump,
    LINEAR_PUMP_CURVE
)

logger = ModuleLogger.get_logger(__name__)

HW_TEMP_F = 180.0
HW_TEMP_LARGE_HOTEL_F = 140.0
HW_DELTA_T_R = 20.0
HW_PUMP_HEAD_FT_H2O = 60.0
BOILER_EFFICIENCY = 0.78
BOILER_MAX_TEMP_F = 203.0


def add_hw_loop(
    model: openstudio.model.Model,
    boiler_fuel_type: str,
    building_type: str | None = None
) -> openstudio.model.PlantLoop:
    """Creates a hot water loop with one boiler and a variable speed pump.

    Parameters
    ----------
    model:
        The building model.
    boiler_fuel_type:
        Fuel type of the boiler as known to OpenStudio, e.g. 'NaturalGas',
        'Electricity'.
    building_type:
        Large hotels run their hot water at 140 °F instead of 180 °F.

    Returns
    -------
    The hot water loop.
    """
    logger.info("Adding hot water loop.")
    hot_water_loop = openstudio.model.PlantLoop(model)
    hot_water_loop.setName('Hot Water Loop')
    hot_water_loop.setMinimumLoopTemperature(10)

    hw_temp_f = HW_TEMP_LARGE_HOTEL_F if building_type == 'LargeHotel' else HW_TEMP_F
    hw_temp_c = f_to_c(hw_temp_f)
    hw_delta_t_k = delta_f_to_k(HW_DELTA_T_R)

    add_scheduled_setpoint(
        model, hot_water_loop.supplyOutletNode(), hw_temp_c,
        schedule_name=f"Hot Water Loop Temp - {hw_temp_f:g}F",
        manager_name='Hot water loop setpoint manager'
    )

    sizing_plant = hot_water_loop.sizingPlant()
    sizing_plant.setLoopType('Heating')
    sizing_plant.setDesignLoopExitTemperature(hw_temp_c)
    sizing_plant.setLoopDesignTemperatureDifference(hw_delta_t_k)

    pump = add_pump(
        model, 'Hot Water Loop Pump', HW_PUMP_HEAD_FT_H2O,
        motor_efficiency=0.9, part_load_coefficients=LINEAR_PUMP_CURVE
    )
    pump.addToNode(hot_water_loop.supplyInletNode())

    boiler = openstudio.model.BoilerHotWater(model)
    boiler.setName('Hot Water Loop Boiler')
    boiler.setEfficiencyCurveTemperatureEvaluationVariable('LeavingBoiler')
    boiler.setFuelType(boiler_fuel_type)
    boiler.setNominalThermalEfficiency(BOILER_EFFICIENCY)
    boiler.setMaximumPartLoadRatio(1.2)
    boiler.setWaterOutletUpperTemperatureLimit(f_to_c(BOILER_MAX_TEMP_F))
    boiler.setBoilerFlowMode('LeavingSetpointModulated')
    hot_water_loop.addSupplyBranchForComponent(boiler)

    if building_type == 'LargeHotel':
        boiler.setSizingFactor(1.2)
        boiler.setWaterOutletUpperTemperatureLimit(95)

    add_loop_pipes(model, hot_water_loop)
    return hot_water_loop

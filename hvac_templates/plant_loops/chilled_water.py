import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import (
    Template,
    template_name,
    f_to_c,
    delta_f_to_k,
    add_loop_pipes,
    add_scheduled_setpoint,
    add_pump,
    LINEAR_PUMP_CURVE
)

logger = ModuleLogger.get_logger(__name__)

CHW_TEMP_F = 44.0
CHW_DELTA_T_R = 10.1
CHW_TEMP_LARGE_HOTEL_F = 45.0
CHW_DELTA_T_LARGE_HOTEL_R = 12.0

# secondary pump part load curve (variable speed, riding the system curve)
SECONDARY_PUMP_CURVE = (0.0, 0.0205, 0.4101, 0.5753)


def add_chw_loop(
    model: openstudio.model.Model,
    standard: str | Template,
    chw_pumping_type: str,
    chiller_cooling_type: str,
    chiller_condenser_type: str,
    chiller_compressor_type: str,
    chiller_capacity_guess_tons: float,
    condenser_water_loop: openstudio.model.PlantLoop | None = None,
    building_type: str | None = None
) -> openstudio.model.PlantLoop | bool:
    """Creates a chilled water loop with one electric EIR chiller.

    Parameters
    ----------
    model:
        The building model.
    standard:
        Code vintage; it is only used in the name of the chiller.
    chw_pumping_type:
        'const_pri': a single variable speed primary pump;
        'const_pri_var_sec': a constant speed primary pump on the supply side
        and a variable speed secondary pump on the demand side, with common
        pipe simulation.
    chiller_cooling_type:
        'WaterCooled' or 'AirCooled'.
    chiller_condenser_type:
        e.g. 'WithCondenser', 'WithoutCondenser'.
    chiller_compressor_type:
        e.g. 'Centrifugal', 'Reciprocating', 'Rotary Screw', 'Scroll'.
    chiller_capacity_guess_tons:
        Initial guess of the chiller capacity. Only used for logging; the
        chiller itself is autosized.
    condenser_water_loop:
        If given, the chiller becomes water cooled and is connected to the
        demand side of this loop. Otherwise the chiller is air cooled.
    building_type:
        Large hotels supply 45 °F chilled water with a 12 °F range.

    Returns
    -------
    The chilled water loop, or False if `chw_pumping_type` is not known.
    """
    if chw_pumping_type not in ('const_pri', 'const_pri_var_sec'):
        logger.error(f"Chilled water pumping type '{chw_pumping_type}' is not recognized.")
        return False

    logger.info("Adding chilled water loop.")
    logger.debug(f"Chiller capacity guess: {chiller_capacity_guess_tons} tons.")
    chilled_water_loop = openstudio.model.PlantLoop(model)
    chilled_water_loop.setName('Chilled Water Loop')
    chilled_water_loop.setMaximumLoopTemperature(98)
    chilled_water_loop.setMinimumLoopTemperature(1)

    if building_type == 'LargeHotel':
        chw_temp_f, chw_delta_t_r = CHW_TEMP_LARGE_HOTEL_F, CHW_DELTA_T_LARGE_HOTEL_R
    else:
        chw_temp_f, chw_delta_t_r = CHW_TEMP_F, CHW_DELTA_T_R
    chw_temp_c = f_to_c(chw_temp_f)
    chw_delta_t_k = delta_f_to_k(chw_delta_t_r)

    add_scheduled_setpoint(
        model, chilled_water_loop.supplyOutletNode(), chw_temp_c,
        schedule_name=f"Chilled Water Loop Temp - {chw_temp_f:g}F",
        manager_name='Chilled water loop setpoint manager'
    )

    sizing_plant = chilled_water_loop.sizingPlant()
    sizing_plant.setLoopType('Cooling')
    sizing_plant.setDesignLoopExitTemperature(chw_temp_c)
    sizing_plant.setLoopDesignTemperatureDifference(chw_delta_t_k)

    if chw_pumping_type == 'const_pri':
        pri_pump = add_pump(
            model, 'Chilled Water Loop Pump', 60.0,
            motor_efficiency=0.9, part_load_coefficients=LINEAR_PUMP_CURVE
        )
        pri_pump.addToNode(chilled_water_loop.supplyInletNode())
    else:
        pri_pump = add_pump(
            model, 'Chilled Water Loop Primary Pump', 15.0,
            variable_speed=False, motor_efficiency=0.9
        )
        pri_pump.addToNode(chilled_water_loop.supplyInletNode())
        sec_pump = add_pump(
            model, 'Chilled Water Loop Secondary Pump', 45.0,
            motor_efficiency=0.9, part_load_coefficients=SECONDARY_PUMP_CURVE
        )
        sec_pump.addToNode(chilled_water_loop.demandInletNode())
        chilled_water_loop.setCommonPipeSimulation('CommonPipe')

    chiller = openstudio.model.ChillerElectricEIR(model)
    chiller.setName(
        f"{template_name(standard)} {chiller_cooling_type} {chiller_condenser_type} "
        f"{chiller_compressor_type} Chiller"
    )
    chilled_water_loop.addSupplyBranchForComponent(chiller)
    chiller.setReferenceLeavingChilledWaterTemperature(chw_temp_c)
    chiller.setReferenceEnteringCondenserFluidTemperature(f_to_c(95.0))
    chiller.setMinimumPartLoadRatio(0.15)
    chiller.setMaximumPartLoadRatio(1.0)
    chiller.setOptimumPartLoadRatio(1.0)
    chiller.setMinimumUnloadingRatio(0.25)
    chiller.setCondenserType('AirCooled')
    chiller.setLeavingChilledWaterLowerTemperatureLimit(f_to_c(36.0))
    chiller.setChillerFlowMode('ConstantFlow')
    if condenser_water_loop is not None:
        condenser_water_loop.addDemandBranchForComponent(chiller)
        chiller.setCondenserType('WaterCooled')

    add_loop_pipes(model, chilled_water_loop)
    return chilled_water_loop

"""Building blocks shared by the loop and system builders: adiabatic pipes,
pumps, scheduled setpoints, zone sizing and the DX and water-to-air heat
pump coils with their performance curves.
"""
import openstudio

from hvac_templates.logging import ModuleLogger
from .units import ft_h2o_to_pa
from .schedules import add_constant_schedule_ruleset
from .curves import create_curve

logger = ModuleLogger.get_logger(__name__)

# part load curve of a pump that rides its system curve
LINEAR_PUMP_CURVE = (0.0, 1.0, 0.0, 0.0)


def outlet_node(component) -> openstudio.model.Node:
    """Returns the node at the outlet of a straight component that is already
    connected to a loop.
    """
    return component.outletModelObject().get().to_Node().get()


def add_loop_pipes(
    model: openstudio.model.Model,
    plant_loop: openstudio.model.PlantLoop,
    prefix: str | None = None
) -> list[openstudio.model.PipeAdiabatic]:
    """Adds the five adiabatic pipes every plant loop needs: a supply and a
    demand bypass branch, and a pipe on the supply outlet, demand inlet and
    demand outlet nodes.

    Parameters
    ----------
    model:
        The building model.
    plant_loop:
        The loop to complete.
    prefix:
        Start of the pipe names. Defaults to the name of the loop.
    """
    prefix = prefix or plant_loop.nameString()
    pipes = []

    supply_bypass = openstudio.model.PipeAdiabatic(model)
    supply_bypass.setName(f"{prefix} Supply Bypass")
    plant_loop.addSupplyBranchForComponent(supply_bypass)
    pipes.append(supply_bypass)

    demand_bypass = openstudio.model.PipeAdiabatic(model)
    demand_bypass.setName(f"{prefix} Demand Bypass")
    plant_loop.addDemandBranchForComponent(demand_bypass)
    pipes.append(demand_bypass)

    nodes = (
        ('Supply Outlet', plant_loop.supplyOutletNode()),
        ('Demand Inlet', plant_loop.demandInletNode()),
        ('Demand Outlet', plant_loop.demandOutletNode())
    )
    for suffix, node in nodes:
        pipe = openstudio.model.PipeAdiabatic(model)
        pipe.setName(f"{prefix} {suffix}")
        pipe.addToNode(node)
        pipes.append(pipe)
    return pipes


def add_scheduled_setpoint(
    model: openstudio.model.Model,
    node: openstudio.model.Node,
    temp_c: float,
    schedule_name: str,
    manager_name: str | None = None
) -> openstudio.model.SetpointManagerScheduled:
    """Puts a constant temperature setpoint `temp_c` on `node` through a
    scheduled setpoint manager.
    """
    schedule = add_constant_schedule_ruleset(model, temp_c, schedule_name)
    manager = openstudio.model.SetpointManagerScheduled(model, schedule)
    if manager_name is not None:
        manager.setName(manager_name)
    manager.addToNode(node)
    return manager


def add_pump(
    model: openstudio.model.Model,
    name: str,
    head_ft_h2o: float,
    variable_speed: bool = True,
    motor_efficiency: float | None = None,
    part_load_coefficients: tuple[float, float, float, float] | None = None
):
    """Creates a pump with rated head `head_ft_h2o` (feet of water) and
    intermittent control. A variable speed pump that gets
    `part_load_coefficients` sends none of its motor losses to the fluid.
    The pump is not yet placed on a node.
    """
    if variable_speed:
        pump = openstudio.model.PumpVariableSpeed(model)
    else:
        pump = openstudio.model.PumpConstantSpeed(model)
    pump.setName(name)
    pump.setRatedPumpHead(ft_h2o_to_pa(head_ft_h2o))
    if motor_efficiency is not None:
        pump.setMotorEfficiency(motor_efficiency)
    if variable_speed and part_load_coefficients is not None:
        c1, c2, c3, c4 = part_load_coefficients
        pump.setFractionofMotorInefficienciestoFluidStream(0)
        pump.setCoefficient1ofthePartLoadPerformanceCurve(c1)
        pump.setCoefficient2ofthePartLoadPerformanceCurve(c2)
        pump.setCoefficient3ofthePartLoadPerformanceCurve(c3)
        pump.setCoefficient4ofthePartLoadPerformanceCurve(c4)
    pump.setPumpControlType('Intermittent')
    return pump


def apply_zone_sizing(
    zone: openstudio.model.ThermalZone,
    cooling_supply_temp_c: float,
    heating_supply_temp_c: float,
    cooling_humidity_ratio: float | None = None,
    heating_humidity_ratio: float | None = None
) -> openstudio.model.SizingZone:
    sizing_zone = zone.sizingZone()
    sizing_zone.setZoneCoolingDesignSupplyAirTemperature(cooling_supply_temp_c)
    sizing_zone.setZoneHeatingDesignSupplyAirTemperature(heating_supply_temp_c)
    if cooling_humidity_ratio is not None:
        sizing_zone.setZoneCoolingDesignSupplyAirHumidityRatio(cooling_humidity_ratio)
    if heating_humidity_ratio is not None:
        sizing_zone.setZoneHeatingDesignSupplyAirHumidityRatio(heating_humidity_ratio)
    return sizing_zone


def _curve_set(model: openstudio.model.Model, prefix: str, parts: tuple[str, ...]) -> list:
    return [create_curve(model, f"{prefix} {part}") for part in parts]


def add_dx_cooling_coil_single_speed(
    model: openstudio.model.Model,
    name: str,
    curve_set: str = 'PSZ DX Clg',
    schedule: openstudio.model.Schedule | None = None
) -> openstudio.model.CoilCoolingDXSingleSpeed:
    """Creates a single speed DX cooling coil.

    Parameters
    ----------
    model:
        The building model.
    name:
        Name of the coil.
    curve_set:
        Prefix of the five curves in `CurveLibrary` the coil is built with:
        'PSZ DX Clg' (packaged single zone air conditioners), 'SAC DX Clg'
        (split air conditioners), 'PTAC DX Clg' (packaged terminal air
        conditioners) or 'HP Clg' (air-to-air heat pumps).
    schedule:
        Availability schedule. Defaults to always on.
    """
    cap_ft, cap_fff, eir_ft, eir_fff, plf = _curve_set(
        model, curve_set, ('Cap-fT', 'Cap-fFF', 'EIR-fT', 'EIR-fFF', 'PLF')
    )
    coil = openstudio.model.CoilCoolingDXSingleSpeed(
        model,
        schedule or model.alwaysOnDiscreteSchedule(),
        cap_ft,
        cap_fff,
        eir_ft,
        eir_fff,
        plf
    )
    coil.setName(name)
    return coil


def add_dx_cooling_coil_two_speed(
    model: openstudio.model.Model,
    name: str,
    schedule: openstudio.model.Schedule | None = None
) -> openstudio.model.CoilCoolingDXTwoSpeed:
    """Creates a two speed DX cooling coil. The low speed uses the same
    temperature curves as the high speed.
    """
    cap_ft, cap_fff, eir_ft, eir_fff, plf, cap_ft_low, eir_ft_low = _curve_set(
        model, 'DX 2spd Clg',
        ('Cap-fT', 'Cap-fFF', 'EIR-fT', 'EIR-fFF', 'PLF', 'Cap-fT', 'EIR-fT')
    )
    coil = openstudio.model.CoilCoolingDXTwoSpeed(
        model,
        schedule or model.alwaysOnDiscreteSchedule(),
        cap_ft,
        cap_fff,
        eir_ft,
        eir_fff,
        plf,
        cap_ft_low,
        eir_ft_low
    )
    coil.setName(name)
    coil.setRatedLowSpeedSensibleHeatRatio(openstudio.OptionalDouble(0.69))
    coil.setBasinHeaterCapacity(10)
    coil.setBasinHeaterSetpointTemperature(2.0)
    return coil


def add_hp_heating_coil(
    model: openstudio.model.Model,
    name: str,
    schedule: openstudio.model.Schedule | None = None,
    with_defrost: bool = False
) -> openstudio.model.CoilHeatingDXSingleSpeed:
    """Creates the DX heating coil of an air-to-air heat pump.

    If `with_defrost` is True the coil also gets a rated COP of 3.3, a
    compressor cut-out at -12.2 °C, a 50 W crankcase heater below 4.4 °C
    and on-demand reverse cycle defrost below 1.67 °C.
    """
    cap_ft, cap_fff, eir_ft, eir_fff, plf = _curve_set(
        model, 'HP Htg', ('Cap-fT', 'Cap-fFF', 'EIR-fT', 'EIR-fFF', 'PLF')
    )
    coil = openstudio.model.CoilHeatingDXSingleSpeed(
        model,
        schedule or model.alwaysOnDiscreteSchedule(),
        cap_ft,
        cap_fff,
        eir_ft,
        eir_fff,
        plf
    )
    coil.setName(name)
    if with_defrost:
        coil.setRatedCOP(3.3)
        coil.setMinimumOutdoorDryBulbTemperatureforCompressorOperation(-12.2)
        coil.setMaximumOutdoorDryBulbTemperatureforDefrostOperation(1.67)
        coil.setCrankcaseHeaterCapacity(50.0)
        coil.setMaximumOutdoorDryBulbTemperatureforCrankcaseHeaterOperation(4.4)
        coil.setDefrostStrategy('ReverseCycle')
        coil.setDefrostControl('OnDemand')
        defrost_eir = create_curve(model, 'HP Htg Defrost EIR-fT')
        coil.setDefrostEnergyInputRatioFunctionofTemperatureCurve(defrost_eir)
    return coil


def add_wahp_heating_coil(
    model: openstudio.model.Model,
    name: str,
    water_loop: openstudio.model.PlantLoop
) -> openstudio.model.CoilHeatingWaterToAirHeatPumpEquationFit:
    """Creates the heating coil of a water-to-air heat pump (rated COP 4.2)
    and connects it to the demand side of `water_loop`.
    """
    coil = openstudio.model.CoilHeatingWaterToAirHeatPumpEquationFit(
        model,
        create_curve(model, 'WAHP Htg Cap'),
        create_curve(model, 'WAHP Htg Power')
    )
    coil.setName(name)
    coil.setRatedHeatingCoefficientofPerformance(4.2)
    water_loop.addDemandBranchForComponent(coil)
    return coil


def add_wahp_cooling_coil(
    model: openstudio.model.Model,
    name: str,
    water_loop: openstudio.model.PlantLoop
) -> openstudio.model.CoilCoolingWaterToAirHeatPumpEquationFit:
    """Creates the cooling coil of a water-to-air heat pump (rated COP 3.4)
    and connects it to the demand side of `water_loop`.
    """
    coil = openstudio.model.CoilCoolingWaterToAirHeatPumpEquationFit(
        model,
        create_curve(model, 'WAHP Clg Total Cap'),
        create_curve(model, 'WAHP Clg Sens Cap'),
        create_curve(model, 'WAHP Clg Power')
    )
    coil.setName(name)
    coil.setRatedCoolingCoefficientofPerformance(3.4)
    water_loop.addDemandBranchForComponent(coil)
    return coil


def add_water_heating_coil(
    model: openstudio.model.Model,
    name: str,
    hot_water_loop: openstudio.model.PlantLoop,
    water_inlet_temp_c: float,
    water_delta_t_k: float,
    air_inlet_temp_c: float,
    air_outlet_temp_c: float,
    schedule: openstudio.model.Schedule | None = None
) -> openstudio.model.CoilHeatingWater:
    """Creates a hot water heating coil with its rating conditions and
    connects it to the demand side of `hot_water_loop`.
    """
    coil = openstudio.model.CoilHeatingWater(model, schedule or model.alwaysOnDiscreteSchedule())
    coil.setName(name)
    coil.setRatedInletWaterTemperature(water_inlet_temp_c)
    coil.setRatedOutletWaterTemperature(water_inlet_temp_c - water_delta_t_k)
    coil.setRatedInletAirTemperature(air_inlet_temp_c)
    coil.setRatedOutletAirTemperature(air_outlet_temp_c)
    hot_water_loop.addDemandBranchForComponent(coil)
    return coil

"""Pieces shared by the air loop builders."""
import openstudio

from hvac_templates.core import (
    Template,
    f_to_c,
    delta_f_to_k,
    initial_damper_position,
    zone_outdoor_air_per_area
)

HW_TEMP_F = 180.0
HW_DELTA_T_R = 20.0
PREHEAT_SA_TEMP_F = 44.6


def hot_water_conditions(hw_temp_f: float = HW_TEMP_F, hw_delta_t_r: float = HW_DELTA_T_R) -> tuple[float, float]:
    """Returns the supply temperature (°C) and the temperature drop (K) of
    the hot water that water heating coils are rated at.
    """
    return f_to_c(hw_temp_f), delta_f_to_k(hw_delta_t_r)


def apply_single_zone_system_sizing(
    air_loop: openstudio.model.AirLoopHVAC,
    precool_temp_c: float = 12.8,
    central_cooling_temp_c: float = 12.8,
    central_heating_temp_c: float = 40.0,
    central_cooling_humidity_ratio: float = 0.0085,
    sizing_option: str = 'Coincident'
) -> openstudio.model.SizingSystem:
    """Sets the system sizing of a constant volume loop without VAV
    terminals. The sizing an air loop is created with suits multizone VAV
    systems.
    """
    sizing_system = air_loop.sizingSystem()
    sizing_system.setTypeofLoadtoSizeOn('Sensible')
    sizing_system.autosizeDesignOutdoorAirFlowRate()
    sizing_system.setCentralHeatingMaximumSystemAirFlowRatio(1.0)
    sizing_system.setPreheatDesignTemperature(7.0)
    sizing_system.setPreheatDesignHumidityRatio(0.008)
    sizing_system.setPrecoolDesignTemperature(precool_temp_c)
    sizing_system.setPrecoolDesignHumidityRatio(0.008)
    sizing_system.setCentralCoolingDesignSupplyAirTemperature(central_cooling_temp_c)
    sizing_system.setCentralHeatingDesignSupplyAirTemperature(central_heating_temp_c)
    sizing_system.setSizingOption(sizing_option)
    sizing_system.setAllOutdoorAirinCooling(False)
    sizing_system.setAllOutdoorAirinHeating(False)
    sizing_system.setCentralCoolingDesignSupplyAirHumidityRatio(central_cooling_humidity_ratio)
    sizing_system.setCentralHeatingDesignSupplyAirHumidityRatio(0.0080)
    sizing_system.setCoolingDesignAirFlowMethod('DesignDay')
    sizing_system.setCoolingDesignAirFlowRate(0.0)
    sizing_system.setHeatingDesignAirFlowMethod('DesignDay')
    sizing_system.setHeatingDesignAirFlowRate(0.0)
    sizing_system.setSystemOutdoorAirMethod('ZoneSum')
    return sizing_system


def apply_multizone_system_sizing(
    air_loop: openstudio.model.AirLoopHVAC,
    preheat_temp_c: float,
    precool_temp_c: float,
    central_cooling_temp_c: float,
    central_heating_temp_c: float
) -> openstudio.model.SizingSystem:
    """Sets the system sizing of a central multizone loop."""
    sizing_system = air_loop.sizingSystem()
    sizing_system.setPreheatDesignTemperature(preheat_temp_c)
    sizing_system.setPrecoolDesignTemperature(precool_temp_c)
    sizing_system.setCentralCoolingDesignSupplyAirTemperature(central_cooling_temp_c)
    sizing_system.setCentralHeatingDesignSupplyAirTemperature(central_heating_temp_c)
    sizing_system.setSizingOption('Coincident')
    sizing_system.setAllOutdoorAirinCooling(False)
    sizing_system.setAllOutdoorAirinHeating(False)
    sizing_system.setSystemOutdoorAirMethod('ZoneSum')
    return sizing_system


def add_diffuser(
    model: openstudio.model.Model,
    air_loop: openstudio.model.AirLoopHVAC,
    zone: openstudio.model.ThermalZone,
    name: str
) -> openstudio.model.AirTerminalSingleDuctConstantVolumeNoReheat:
    """Connects `zone` to `air_loop` through an uncontrolled terminal."""
    diffuser = openstudio.model.AirTerminalSingleDuctConstantVolumeNoReheat(
        model, model.alwaysOnDiscreteSchedule()
    )
    diffuser.setName(name)
    air_loop.addBranchForZone(zone, diffuser.to_StraightComponent())
    return diffuser


def add_water_coil_controller_name(coil, name: str) -> None:
    """Names the water coil controller OpenStudio creates when the coil is
    placed on an air loop.
    """
    controller = coil.controllerWaterCoil()
    if controller.is_initialized():
        controller.get().setName(name)


def add_vav_reheat_terminal(
    model: openstudio.model.Model,
    standard: str | Template,
    air_loop: openstudio.model.AirLoopHVAC,
    zone: openstudio.model.ThermalZone,
    rht_coil,
    max_reheat_temp_c: float | None = None
) -> openstudio.model.AirTerminalSingleDuctVAVReheat:
    """Adds a VAV reheat terminal for `zone` to `air_loop`. The terminal
    keeps a constant minimum flow fraction. If `max_reheat_temp_c` is given,
    reheat is limited to half the design flow and to that temperature.
    """
    terminal = openstudio.model.AirTerminalSingleDuctVAVReheat(model, model.alwaysOnDiscreteSchedule(), rht_coil)
    terminal.setName(f"{zone.nameString()} VAV Term")
    terminal.setZoneMinimumAirFlowMethod('Constant')
    terminal.setConstantMinimumAirFlowFraction(
        initial_damper_position(standard, zone_outdoor_air_per_area(zone))
    )
    if max_reheat_temp_c is not None:
        terminal.setMaximumFlowPerZoneFloorAreaDuringReheat(0.0)
        terminal.setMaximumFlowFractionDuringReheat(0.5)
        terminal.setMaximumReheatAirTemperature(max_reheat_temp_c)
    air_loop.addBranchForZone(zone, terminal.to_StraightComponent())
    return terminal

"""Walk-in freezers and display cases on a single compressor refrigeration
system with an air-cooled condenser.
"""
import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import Template, is_doe_ref, f_to_c, add_schedule, add_curve

logger = ModuleLogger.get_logger(__name__)

# case type -> case properties
CASE_PROPERTIES = {
    'Walkin Freezer': {
        'case_temp_f': -9.4,
        'latent_heat_ratio': 0.1,
        'runtime_fraction': 0.4,
        'fraction_antisweat_to_case': 0.0,
        'under_case_return_air_fraction': 0.0,
        'defrost_type': 'Electric'
    },
    'Display Case': {
        'case_temp_f': 35.6,
        'latent_heat_ratio': 0.08,
        'runtime_fraction': 0.85,
        'fraction_antisweat_to_case': 0.2,
        'under_case_return_air_fraction': 0.05,
        'defrost_type': 'None'
    }
}
RATED_AMBIENT_TEMP_F = 75.0

# (hour, minute, value) ending each interval of the day
WALKIN_DEFROST_PROFILE = ((11, 0, 0), (11, 20, 1), (23, 0, 0), (23, 20, 1), (24, 0, 0))
DISPLAY_CASE_DEFROST_PROFILE = ((23, 20, 0),)
DEFROST_DRIPDOWN_PROFILE = ((11, 0, 0), (11, 30, 1), (23, 0, 0), (23, 30, 1), (24, 0, 0))
CASE_CREDIT_PROFILE = ((7, 0, 0.2), (21, 0, 0.4), (24, 0, 0.2))


def _latent_case_credit_curve_name(case_type: str, standard: str | Template) -> str:
    if case_type == 'Display Case':
        return 'Multi Shelf Vertical Latent Energy Multiplier'
    if is_doe_ref(standard):
        return 'Single Shelf Horizontal Latent Energy Multiplier_Pre2004'
    return 'Single Shelf Horizontal Latent Energy Multiplier_After2004'


def _add_profile_schedule(
    model: openstudio.model.Model,
    name: str,
    profile: tuple[tuple[int, int, float], ...]
) -> openstudio.model.ScheduleRuleset:
    schedule = openstudio.model.ScheduleRuleset(model)
    schedule.setName(name)
    day_schedule = schedule.defaultDaySchedule()
    day_schedule.setName(f"{name} Default")
    for hour, minute, value in profile:
        day_schedule.addValue(openstudio.Time(0, hour, minute, 0), value)
    return schedule


def add_refrigeration(
    model: openstudio.model.Model,
    standard: str | Template,
    case_type: str,
    cooling_capacity_per_length: float,
    length: float,
    evaporator_fan_pwr_per_length: float,
    lighting_per_length: float,
    lighting_sch_name: str | None,
    defrost_pwr_per_length: float,
    restocking_sch_name: str | None,
    cop: float | None,
    cop_f_of_t_curve_name: str | None,
    condenser_fan_pwr: float,
    condenser_fan_pwr_curve_name: str | None,
    thermal_zone: openstudio.model.ThermalZone
) -> openstudio.model.RefrigerationSystem | bool:
    """Adds a refrigerated case to `thermal_zone` and serves it with a new
    refrigeration system: one compressor and one air-cooled condenser.

    Parameters
    ----------
    case_type:
        'Walkin Freezer' (-9.4 °F, electric defrost twice a day) or
        'Display Case' (35.6 °F, no defrost).
    cooling_capacity_per_length:
        Rated total cooling capacity per unit case length in W/m.
    length:
        Case length in m.
    cop, cop_f_of_t_curve_name, condenser_fan_pwr_curve_name:
        Only logged. The compressor and the condenser keep the performance
        curves OpenStudio creates them with.
    condenser_fan_pwr:
        Rated condenser fan power in W.

    Returns
    -------
    The refrigeration system, or False if `case_type` is not recognized.
    """
    props = CASE_PROPERTIES.get(case_type)
    if props is None:
        logger.error(f"Refrigeration case type '{case_type}' is not recognized.")
        return False
    logger.info(f"Started adding {case_type} refrigeration system to {thermal_zone.nameString()}.")
    logger.debug(
        f"Compressor COP {cop} with curve '{cop_f_of_t_curve_name}', condenser "
        f"fan power curve '{condenser_fan_pwr_curve_name}' are not applied."
    )

    is_walkin = case_type == 'Walkin Freezer'
    defrost_sch = _add_profile_schedule(
        model, 'Refrigeration Defrost Schedule',
        WALKIN_DEFROST_PROFILE if is_walkin else DISPLAY_CASE_DEFROST_PROFILE
    )

    ref_case = openstudio.model.RefrigerationCase(model, defrost_sch)
    ref_case.setName(f"{thermal_zone.nameString()} {case_type}")
    ref_case.setAvailabilitySchedule(model.alwaysOnDiscreteSchedule())
    ref_case.setThermalZone(thermal_zone)
    ref_case.setRatedTotalCoolingCapacityperUnitLength(cooling_capacity_per_length)
    ref_case.setCaseLength(length)
    ref_case.setCaseOperatingTemperature(f_to_c(props['case_temp_f']))
    ref_case.setStandardCaseFanPowerperUnitLength(evaporator_fan_pwr_per_length)
    ref_case.setOperatingCaseFanPowerperUnitLength(evaporator_fan_pwr_per_length)
    ref_case.setStandardCaseLightingPowerperUnitLength(lighting_per_length)
    ref_case.resetInstalledCaseLightingPowerperUnitLength()
    ref_case.setCaseLightingSchedule(add_schedule(model, lighting_sch_name))
    ref_case.setHumidityatZeroAntiSweatHeaterEnergy(0)
    if props['defrost_type'] != 'None':
        ref_case.setCaseDefrostType(props['defrost_type'])
        ref_case.setCaseDefrostPowerperUnitLength(defrost_pwr_per_length)
        ref_case.setCaseDefrostDripDownSchedule(
            _add_profile_schedule(model, 'Refrigeration Defrost DripDown Schedule', DEFROST_DRIPDOWN_PROFILE)
        )
    ref_case.setUnderCaseHVACReturnAirFraction(props['under_case_return_air_fraction'])
    ref_case.setFractionofAntiSweatHeaterEnergytoCase(props['fraction_antisweat_to_case'])
    ref_case.resetDesignEvaporatorTemperatureorBrineInletTemperature()
    ref_case.setRatedAmbientTemperature(f_to_c(RATED_AMBIENT_TEMP_F))
    ref_case.setRatedLatentHeatRatio(props['latent_heat_ratio'])
    ref_case.setRatedRuntimeFraction(props['runtime_fraction'])
    latent_curve = add_curve(model, _latent_case_credit_curve_name(case_type, standard))
    if latent_curve is not None:
        ref_case.setLatentCaseCreditCurve(latent_curve)
    ref_case.setCaseHeight(0)
    ref_case.setRefrigeratedCaseRestockingSchedule(add_schedule(model, restocking_sch_name))
    if is_walkin:
        ref_case.setCaseCreditFractionSchedule(
            _add_profile_schedule(model, 'Refrigeration Case Credit Schedule', CASE_CREDIT_PROFILE)
        )

    compressor = openstudio.model.RefrigerationCompressor(model)
    condenser = openstudio.model.RefrigerationCondenserAirCooled(model)
    condenser.setRatedFanPower(condenser_fan_pwr)

    ref_sys = openstudio.model.RefrigerationSystem(model)
    ref_sys.addCompressor(compressor)
    ref_sys.addCase(ref_case)
    ref_sys.setRefrigerationCondenser(condenser)
    ref_sys.setSuctionPipingZone(thermal_zone)

    logger.info('Finished adding refrigeration system.')
    return ref_sys

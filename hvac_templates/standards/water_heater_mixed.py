"""Efficiency requirements of mixed tank water heaters.

The efficiency and the skin loss coefficient (UA) of the tank follow from the
metric the code prescribes for the heater's fuel type and capacity. The
methods follow PNNL's prototype model enhancements (Appendix A, service water
heating).
"""
import numpy as np
import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import Q_, Template, template_name
from .data import StandardsData

logger = ModuleLogger.get_logger(__name__)

SUPPORTED_FUELS = ('NaturalGas', 'Electricity')

# UA of heaters rated by thermal efficiency alone (Btu/hr per °F)
FIXED_UA_BTU_PER_HR_PER_F = 11.37
# temperature difference between tank and surroundings during the standby
# loss test (°F)
STANDBY_DELTA_T_F = 70.0
# temperature difference of the energy factor test (°F)
EF_DELTA_T_F = 67.5


def water_heater_mixed_find_capacity(
    water_heater_mixed: openstudio.model.WaterHeaterMixed
) -> float | bool:
    """Returns the heating capacity of the water heater in Btu/hr, taken
    from the hard-sized or else the autosized maximum capacity. Returns False
    if neither is available.
    """
    if water_heater_mixed.heaterMaximumCapacity().is_initialized():
        capacity_w = water_heater_mixed.heaterMaximumCapacity().get()
    elif water_heater_mixed.autosizedHeaterMaximumCapacity().is_initialized():
        capacity_w = water_heater_mixed.autosizedHeaterMaximumCapacity().get()
    else:
        logger.warning(f"For {water_heater_mixed.nameString()} capacity is not available.")
        return False
    return Q_(capacity_w, 'W').to('Btu/hr').m


def gas_recovery_efficiency(energy_factor: float, capacity_btu_per_hr: float = 75_000.0) -> float:
    """Returns the recovery efficiency of a gas water heater with
    `energy_factor`. It solves the energy factor test equations for a heater
    with a thermal efficiency of 0.82, a volume of 40 gallon and a fixed
    capacity of 75 000 Btu/hr.
    """
    ef, cap = energy_factor, capacity_btu_per_hr
    root = np.sqrt(
        6724 * ef ** 2 * cap ** 2
        + 40_409_100 * ef ** 2 * cap
        - 28_080_900 * ef * cap
        + 29_318_000_625 * ef ** 2
        - 58_636_001_250 * ef
        + 29_318_000_625
    )
    return float((root + 82 * ef * cap + 171_225 * ef - 171_225) / (200 * ef * cap))


def efficiency_and_ua(
    wh_props: dict,
    fuel_type: str,
    capacity_btu_per_hr: float,
    volume_gal: float
) -> tuple[float | None, float | None]:
    """Returns the thermal efficiency and the UA (Btu/hr per °F) of a water
    heater that meets the requirements in `wh_props`, a row of the
    `water_heaters` table. The row's columns decide which method applies.
    Either value is None if the row doesn't define it.
    """
    eff = ua = None

    # thermal efficiency alone (rare)
    if wh_props.get('thermal_efficiency') is not None and wh_props.get('standby_loss_capacity_allowance') is None:
        eff = wh_props['thermal_efficiency']
        ua = FIXED_UA_BTU_PER_HR_PER_F

    # energy factor: small electric and small gas heaters
    if wh_props.get('energy_factor_base') is not None and wh_props.get('energy_factor_volume_derate') is not None:
        ef = wh_props['energy_factor_base'] - wh_props['energy_factor_volume_derate'] * volume_gal
        if fuel_type == 'Electricity':
            eff = 1.0
            ua = (41_094 * (1 / ef - 1)) / (24 * EF_DELTA_T_F)
        elif fuel_type == 'NaturalGas':
            eff = 0.82
            re = gas_recovery_efficiency(ef)
            ua = (eff - re) * capacity_btu_per_hr / EF_DELTA_T_F

    # standby loss: large electric heaters
    if wh_props.get('standby_loss_base') is not None and wh_props.get('standby_loss_volume_allowance') is not None:
        eff = 1.0
        sl = wh_props['standby_loss_base'] + wh_props['standby_loss_volume_allowance'] * np.sqrt(volume_gal)
        ua = float(sl) / STANDBY_DELTA_T_F

    # hourly loss: newer large electric heaters
    if wh_props.get('hourly_loss_base') is not None and wh_props.get('hourly_loss_volume_allowance') is not None:
        eff = 1.0
        hourly_loss_pct = (wh_props['hourly_loss_base'] + wh_props['hourly_loss_volume_allowance'] / volume_gal) / 100
        # water at 120 °F holds 8.25 Btu per gallon and °F
        hourly_loss_btu_per_hr = hourly_loss_pct * volume_gal * 8.25 * STANDBY_DELTA_T_F
        ua = hourly_loss_btu_per_hr / STANDBY_DELTA_T_F

    # standby loss with capacity allowance: large gas heaters
    if (
        wh_props.get('standby_loss_capacity_allowance') is not None
        and wh_props.get('standby_loss_volume_allowance') is not None
        and wh_props.get('thermal_efficiency') is not None
    ):
        et = wh_props['thermal_efficiency']
        sl = (
            capacity_btu_per_hr / wh_props['standby_loss_capacity_allowance']
            + wh_props['standby_loss_volume_allowance'] * np.sqrt(volume_gal)
        )
        ua = float(sl * et) / STANDBY_DELTA_T_F
        eff = (ua * STANDBY_DELTA_T_F + capacity_btu_per_hr * et) / capacity_btu_per_hr

    return eff, ua


def water_heater_mixed_apply_efficiency(
    water_heater_mixed: openstudio.model.WaterHeaterMixed,
    template: str | Template
) -> bool:
    """Sets the thermal efficiency, the skin loss coefficients and the
    parasitic loads of the water heater to the minimum requirements of
    `template`, and appends the efficiency to its name.

    Returns False, after logging a warning, if the capacity, the volume or
    the requirements of the water heater cannot be found.
    """
    name = water_heater_mixed.nameString()
    capacity_w = water_heater_mixed.heaterMaximumCapacity()
    if not capacity_w.is_initialized():
        logger.warning(f"For {name}, cannot find capacity, standard will not be applied.")
        return False
    capacity_btu_per_hr = Q_(capacity_w.get(), 'W').to('Btu/hr').m

    volume_m3 = water_heater_mixed.tankVolume()
    if not volume_m3.is_initialized():
        logger.warning(f"For {name}, cannot find volume, standard will not be applied.")
        return False
    volume_gal = Q_(volume_m3.get(), 'm**3').to('gallon').m

    fuel_type = water_heater_mixed.heaterFuelType()
    if fuel_type not in SUPPORTED_FUELS:
        logger.warning(f"For {name}, fuel type of {fuel_type} is not yet supported, standard will not be applied.")
        return False

    criteria = {'template': template_name(template), 'fuel_type': fuel_type}
    wh_props = StandardsData.find_object('water_heaters', criteria, capacity_btu_per_hr)
    if wh_props is None:
        logger.warning(f"For {name}, cannot find water heater properties, cannot apply efficiency standard.")
        return False

    water_heater_eff, ua_btu_per_hr_per_f = efficiency_and_ua(
        wh_props, fuel_type, capacity_btu_per_hr, volume_gal
    )
    if water_heater_eff is None:
        logger.warning(f"For {name}, cannot calculate efficiency, cannot apply efficiency standard.")
        return False
    if ua_btu_per_hr_per_f is None:
        logger.warning(f"For {name}, cannot calculate UA, cannot apply efficiency standard.")
        return False

    ua_w_per_k = Q_(ua_btu_per_hr_per_f, 'Btu/hr/delta_degF').to('W/K').m

    water_heater_mixed.setHeaterThermalEfficiency(water_heater_eff)
    water_heater_mixed.setOffCycleLossCoefficienttoAmbientTemperature(ua_w_per_k)
    water_heater_mixed.setOnCycleLossCoefficienttoAmbientTemperature(ua_w_per_k)
    # pilot lights were removed, only the fuel and heat fractions remain
    water_heater_mixed.setOnCycleParasiticFuelType(fuel_type)
    water_heater_mixed.setOnCycleParasiticHeatFractiontoTank(0)
    water_heater_mixed.setOffCycleParasiticFuelType(fuel_type)
    water_heater_mixed.setOffCycleParasiticHeatFractiontoTank(0.8)

    water_heater_mixed.setName(f"{name} {round(water_heater_eff, 3)} Therm Eff")
    logger.info(
        f"For {template_name(template)}: {water_heater_mixed.nameString()}; "
        f"thermal efficiency = {water_heater_eff:.3f}, "
        f"skin-loss UA = {round(ua_btu_per_hr_per_f)}Btu/hr"
    )
    return True


def water_heater_mixed_apply_prm_baseline_fuel_type(
    water_heater_mixed: openstudio.model.WaterHeaterMixed,
    building_type: str
) -> bool:
    """The baseline water heater uses the same fuel as the proposed one;
    nothing is changed.
    """
    return True

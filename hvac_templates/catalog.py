"""Look-up of the template builders by the name of the system archetype
they build.

Examples
--------
>>> model = openstudio.model.Model()
>>> hw_loop = add_system(model, 'Hot Water Loop', boiler_fuel_type='NaturalGas')
"""
from typing import Any, Callable

import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.plant_loops import (
    add_hw_loop,
    add_chw_loop,
    add_cw_loop,
    add_hp_loop,
    add_swh_loop,
    add_water_heater,
    add_swh_booster,
    add_swh_end_uses,
    add_swh_end_uses_by_space,
    add_booster_swh_end_uses
)
from hvac_templates.air_systems import (
    add_vav_reheat,
    add_vav_pfp_boxes,
    add_pvav,
    add_cav,
    add_psz_ac,
    add_data_center_hvac,
    add_split_AC,
    add_doas
)
from hvac_templates.zone_equipment import add_ptac, add_pthp, add_unitheater, add_high_temp_radiant
from hvac_templates.auxiliary import add_data_center_load, add_elevator, add_exhaust_fan, add_refrigeration

logger = ModuleLogger.get_logger(__name__)

SYSTEM_BUILDERS: dict[str, Callable[..., Any]] = {
    'Hot Water Loop': add_hw_loop,
    'Chilled Water Loop': add_chw_loop,
    'Condenser Water Loop': add_cw_loop,
    'Heat Pump Loop': add_hp_loop,
    'Service Water Loop': add_swh_loop,
    'Water Heater': add_water_heater,
    'SWH Booster': add_swh_booster,
    'SWH End Uses': add_swh_end_uses,
    'SWH End Uses By Space': add_swh_end_uses_by_space,
    'Booster SWH End Uses': add_booster_swh_end_uses,
    'VAV Reheat': add_vav_reheat,
    'VAV PFP Boxes': add_vav_pfp_boxes,
    'PVAV': add_pvav,
    'CAV': add_cav,
    'PSZ-AC': add_psz_ac,
    'Data Center HVAC': add_data_center_hvac,
    'Split AC': add_split_AC,
    'DOAS': add_doas,
    'PTAC': add_ptac,
    'PTHP': add_pthp,
    'Unit Heater': add_unitheater,
    'High Temp Radiant': add_high_temp_radiant,
    'Data Center Load': add_data_center_load,
    'Elevator': add_elevator,
    'Exhaust Fan': add_exhaust_fan,
    'Refrigeration': add_refrigeration
}


def get_builder(name: str) -> Callable[..., Any]:
    """Returns the builder of the system archetype `name`.

    Raises
    ------
    KeyError
        If no builder is known under `name`.
    """
    try:
        return SYSTEM_BUILDERS[name]
    except KeyError:
        raise KeyError(
            f"No builder for system '{name}'. Known systems are: "
            f"{', '.join(SYSTEM_BUILDERS)}."
        ) from None


def add_system(model: openstudio.model.Model, name: str, **kwargs) -> Any:
    """Builds the system archetype `name` in `model`. The keyword arguments
    are passed on to the builder.
    """
    builder = get_builder(name)
    logger.debug(f"Building '{name}' with {builder.__name__}.")
    return builder(model, **kwargs)

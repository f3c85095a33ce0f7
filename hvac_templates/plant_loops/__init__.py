from .hot_water import add_hw_loop
from .chilled_water import add_chw_loop
from .condenser_water import add_cw_loop
from .heat_pump import add_hp_loop
from .service_water import (
    add_swh_loop,
    add_water_heater,
    add_swh_booster,
    add_swh_end_uses,
    add_swh_end_uses_by_space,
    add_booster_swh_end_uses
)

from .templates import (
    Template,
    DOE_REF_TEMPLATES,
    template_name,
    is_doe_ref,
    vav_damper_action,
    set_vav_damper_action,
    initial_damper_position,
    zone_outdoor_air_per_area
)
from .units import (
    Q_,
    to_si,
    f_to_c,
    c_to_f,
    delta_f_to_k,
    ft_h2o_to_pa,
    in_h2o_to_pa
)
from .schedules import (
    ScheduleLibrary,
    add_schedule,
    add_constant_schedule_ruleset,
    add_temperature_type_limits,
    add_always_off_schedule
)
from .curves import (
    CurveLibrary,
    create_curve,
    add_curve
)
from .components import (
    LINEAR_PUMP_CURVE,
    outlet_node,
    add_loop_pipes,
    add_scheduled_setpoint,
    add_pump,
    apply_zone_sizing,
    add_dx_cooling_coil_single_speed,
    add_dx_cooling_coil_two_speed,
    add_hp_heating_coil,
    add_wahp_heating_coil,
    add_wahp_cooling_coil,
    add_water_heating_coil
)

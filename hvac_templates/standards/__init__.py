from .data import StandardsData
from .water_heater_mixed import (
    water_heater_mixed_apply_efficiency,
    water_heater_mixed_apply_prm_baseline_fuel_type,
    water_heater_mixed_find_capacity
)
from .fan import (
    fan_baseline_impeller_efficiency,
    fan_change_impeller_efficiency,
    fan_change_motor_efficiency,
    fan_brake_horsepower,
    fan_apply_standard_minimum_motor_efficiency
)
from .cooling_tower import (
    cooling_tower_apply_minimum_power_per_flow,
    cooling_tower_variable_speed_apply_efficiency_and_curves
)
from .zone_hvac_component import (
    zone_hvac_apply_prm_baseline_fan_power,
    zone_hvac_apply_standard_controls,
    zone_hvac_vestibule_heating_control_required,
    zone_hvac_apply_vestibule_heating_control
)

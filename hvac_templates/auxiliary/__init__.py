from .data_center import add_data_center_load
from .elevator import add_elevator, elevator_lift_power, elevator_fan_power, elevator_lighting_power
from .exhaust_fan import add_exhaust_fan
from .refrigeration import add_refrigeration

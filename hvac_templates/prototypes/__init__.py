from .large_hotel import (
    large_hotel_add_extra_equip_kitchen,
    large_hotel_custom_hvac_tweaks,
    exhaust_fan_space_types
)

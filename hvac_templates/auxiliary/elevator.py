"""Elevator lift motors, plus the ventilation fan and the lights of the
elevator cab.
"""
import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import Template, is_doe_ref, add_schedule

logger = ModuleLogger.get_logger(__name__)

# lift motor power in W per template group and elevator type
DOE_REF_LIFT_POWER = {'Traction': 18537.0, 'Hydraulic': 14610.0}
DOE_REF_MIDRISE_HYDRAULIC_LIFT_POWER = 16055.0
CODE_LIFT_POWER = {'Traction': 20370.0, 'Hydraulic': 16055.0}

CAB_LENGTH_FT = 6.66
CAB_WIDTH_FT = 4.25
CAB_HEIGHT_FT = 8.0
VENT_RATE_ACM = 1.0                 # air changes per minute
VENT_POWER_W_PER_CFM = 0.33

DESIGN_LIGHTING_LM_PER_FT2 = 30.0
LIGHT_LOSS_FACTOR = 0.75
INCANDESCENT_FRACTION = 0.7
LED_FRACTION = 0.3
INCANDESCENT_EFFICACY_LM_PER_W = 10.0
LED_EFFICACY_LM_PER_W = 35.0


def elevator_lift_power(
    standard: str | Template,
    elevator_type: str,
    building_type: str | None = None
) -> float:
    """Returns the lift motor power of one elevator in W. An unknown
    `elevator_type` is taken as hydraulic.
    """
    doe_ref = is_doe_ref(standard)
    powers = DOE_REF_LIFT_POWER if doe_ref else CODE_LIFT_POWER
    if elevator_type not in powers:
        lift_pwr_w = powers['Hydraulic']
        logger.warning(
            f"Elevator type '{elevator_type}' not recognized, will assume "
            f"Hydraulic elevator, {lift_pwr_w} W."
        )
        return lift_pwr_w
    if doe_ref and elevator_type == 'Hydraulic' and building_type == 'MidriseApartment':
        return DOE_REF_MIDRISE_HYDRAULIC_LIFT_POWER
    return powers[elevator_type]


def elevator_fan_power() -> float:
    """Returns the cab ventilation fan power in W: one air change per minute
    at 0.33 W/cfm.
    """
    volume_ft3 = CAB_LENGTH_FT * CAB_WIDTH_FT * CAB_HEIGHT_FT
    vent_rate_cfm = volume_ft3 / VENT_RATE_ACM
    return VENT_POWER_W_PER_CFM * vent_rate_cfm


def elevator_lighting_power() -> float:
    """Returns the cab lighting power in W. The cab is lit to 30 lm/ft2
    after light losses, 70 % by incandescent lamps and 30 % by LEDs.
    """
    area_ft2 = CAB_LENGTH_FT * CAB_WIDTH_FT
    target_ltg_lm = DESIGN_LIGHTING_LM_PER_FT2 / LIGHT_LOSS_FACTOR * area_ft2
    w_incandescent = target_ltg_lm * INCANDESCENT_FRACTION / INCANDESCENT_EFFICACY_LM_PER_W
    w_led = target_ltg_lm * LED_FRACTION / LED_EFFICACY_LM_PER_W
    return w_incandescent + w_led


def _add_equipment(
    model: openstudio.model.Model,
    space: openstudio.model.Space,
    definition_name: str,
    equipment_name: str,
    design_level_w: float,
    schedule_name: str | None,
    multiplier: float
) -> openstudio.model.ElectricEquipment:
    definition = openstudio.model.ElectricEquipmentDefinition(model)
    definition.setName(definition_name)
    definition.setDesignLevel(design_level_w)
    equipment = openstudio.model.ElectricEquipment(definition)
    equipment.setName(equipment_name)
    equipment.setSchedule(add_schedule(model, schedule_name))
    equipment.setSpace(space)
    equipment.setMultiplier(multiplier)
    return equipment


def add_elevator(
    model: openstudio.model.Model,
    standard: str | Template,
    space: openstudio.model.Space,
    number_of_elevators: float,
    elevator_type: str,
    elevator_schedule: str | None,
    elevator_fan_schedule: str | None,
    elevator_lights_schedule: str | None,
    building_type: str | None = None
) -> openstudio.model.ElectricEquipment:
    """Adds the elevators of a building to `space` as electric equipment.

    The DOE reference buildings only model the lift motors. Code vintages
    also get the cab fans and lights.

    Parameters
    ----------
    number_of_elevators:
        Multiplier of the equipment.
    elevator_type:
        'Traction' or 'Hydraulic'.

    Returns
    -------
    The lift motor equipment.
    """
    n = round(number_of_elevators)
    lift_pwr_w = elevator_lift_power(standard, elevator_type, building_type)
    elevator_equipment = _add_equipment(
        model, space, 'Elevator Lift Motor', f"{n} Elevator Lift Motors",
        lift_pwr_w, elevator_schedule, number_of_elevators
    )
    logger.info(f"Added {n} {elevator_type} elevators of {lift_pwr_w:.0f} W to {space.nameString()}.")
    if is_doe_ref(standard):
        return elevator_equipment

    _add_equipment(
        model, space, 'Elevator Fan', f"{n} Elevator Fans",
        elevator_fan_power(), elevator_fan_schedule, number_of_elevators
    )
    _add_equipment(
        model, space, 'Elevator Lights', f"{n} Elevator Lights",
        elevator_lighting_power(), elevator_lights_schedule, number_of_elevators
    )
    return elevator_equipment

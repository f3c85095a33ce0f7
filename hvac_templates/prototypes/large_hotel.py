"""Adjustments that only the large hotel prototype building gets: kitchen
refrigerators and freezers, and exhaust fans in the kitchen, laundry and
banquet spaces.
"""
import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import Template, template_name, is_doe_ref, add_schedule, Q_
from hvac_templates.standards import StandardsData

logger = ModuleLogger.get_logger(__name__)

KITCHEN_SPACE_NAME = 'Kitchen_Flr_6'
LAUNDRY_SPACE_NAME = 'Laundry_Flr_1'
KITCHEN_COOLING_MIN_AIR_FLOW_FRACTION = 0.7
LAUNDRY_COOLING_MIN_AIR_FLOW = 0.23567919336    # m3/s

# name -> design level in W
KITCHEN_EQUIPMENT = {
    'Kitchen_Reach-in-Freezer': 457.7,
    'Kitchen_Reach-in-Refrigerator': 285.0
}
KITCHEN_EQUIPMENT_RADIANT_FRACTION = 0.25
KITCHEN_EQUIPMENT_SCHEDULE = 'HotelLarge ALWAYS_ON'


def _get_space(model: openstudio.model.Model, name: str) -> openstudio.model.Space | None:
    space = model.getSpaceByName(name)
    if not space.is_initialized():
        logger.error(f"Space '{name}' is not in the model.")
        return None
    return space.get()


def large_hotel_add_extra_equip_kitchen(
    model: openstudio.model.Model,
    template: str | Template,
    kitchen_space_name: str = KITCHEN_SPACE_NAME
) -> list[openstudio.model.ElectricEquipment]:
    """Adds a reach-in freezer and a reach-in refrigerator to the space type
    of the kitchen. The DOE reference buildings don't have them.

    Returns
    -------
    The new equipment, or an empty list if nothing was added.
    """
    if is_doe_ref(template):
        return []
    kitchen_space = _get_space(model, kitchen_space_name)
    if kitchen_space is None:
        return []
    if not kitchen_space.spaceType().is_initialized():
        logger.error(f"Space '{kitchen_space_name}' has no space type, no kitchen equipment added.")
        return []
    kitchen_space_type = kitchen_space.spaceType().get()
    schedule = add_schedule(model, KITCHEN_EQUIPMENT_SCHEDULE)

    equipment = []
    for i, (name, design_level) in enumerate(KITCHEN_EQUIPMENT.items(), start=1):
        definition = openstudio.model.ElectricEquipmentDefinition(model)
        definition.setName(f"Kitchen Electric Equipment Definition{i}")
        definition.setFractionLatent(0)
        definition.setFractionRadiant(KITCHEN_EQUIPMENT_RADIANT_FRACTION)
        definition.setFractionLost(0)
        definition.setDesignLevel(design_level)
        elec_equip = openstudio.model.ElectricEquipment(definition)
        elec_equip.setName(name)
        elec_equip.setSpaceType(kitchen_space_type)
        elec_equip.setSchedule(schedule)
        equipment.append(elec_equip)
    return equipment


def exhaust_fan_space_types(template: str | Template) -> list[str]:
    """Banquet halls get exhaust fans from 90.1-2010 on."""
    if template_name(template) in (Template.ASHRAE_90_1_2004.value, Template.ASHRAE_90_1_2007.value):
        return ['Kitchen', 'Laundry']
    return ['Banquet', 'Kitchen', 'Laundry']


def _add_exhaust_fan_equipment(
    model: openstudio.model.Model,
    space: openstudio.model.Space,
    power_w: float,
    schedule: openstudio.model.Schedule
) -> openstudio.model.ElectricEquipment:
    # the fan energy leaves the building with the exhaust air
    definition = openstudio.model.ElectricEquipmentDefinition(model)
    definition.setName(f"{space.nameString()} Electric Equipment Definition")
    definition.setDesignLevel(power_w)
    definition.setFractionLatent(0)
    definition.setFractionRadiant(0)
    definition.setFractionLost(1)
    elec_equip = openstudio.model.ElectricEquipment(definition)
    elec_equip.setName(f"{space.nameString()} Exhaust Fan Equipment")
    elec_equip.setSchedule(schedule)
    if space.spaceType().is_initialized():
        elec_equip.setSpaceType(space.spaceType().get())
    else:
        elec_equip.setSpace(space)
    return elec_equip


def large_hotel_custom_hvac_tweaks(
    model: openstudio.model.Model,
    template: str | Template,
    space_type_map: dict[str, list[str]],
    building_type: str = 'LargeHotel'
) -> bool:
    """Applies the HVAC adjustments of the large hotel.

    Parameters
    ----------
    space_type_map:
        Maps the standards space type names ('Kitchen', 'Laundry', ...) to
        the names of the spaces that have this space type.

    Returns
    -------
    True, or False if a space type is missing from the `space_types` table
    or a space is missing from the model.
    """
    logger.info('Started building type specific adjustments.')
    large_hotel_add_extra_equip_kitchen(model, template)

    for space_type_name in exhaust_fan_space_types(template):
        space_type_data = StandardsData.find_object(
            'space_types',
            {
                'template': template_name(template),
                'building_type': building_type,
                'space_type': space_type_name
            }
        )
        if space_type_data is None:
            logger.error(
                f"Unable to find space type {template_name(template)}-"
                f"{building_type}-{space_type_name}."
            )
            return False
        if space_type_data['exhaust_schedule'] is None:
            logger.error(f"Unable to find exhaust schedule for space type {space_type_name}.")
            return False
        exhaust_schedule = add_schedule(model, space_type_data['exhaust_schedule'])
        balanced_exhaust_schedule = None
        if space_type_data['balanced_exhaust_fraction_schedule'] is not None:
            balanced_exhaust_schedule = add_schedule(model, space_type_data['balanced_exhaust_fraction_schedule'])
        max_flow_rate = Q_(space_type_data['exhaust_fan_maximum_flow_rate'], 'ft**3/min').to('m**3/s').m

        for space_name in space_type_map.get(space_type_name, []):
            space = _get_space(model, space_name)
            if space is None or not space.thermalZone().is_initialized():
                logger.error(f"Space '{space_name}' is missing or not in a thermal zone.")
                return False
            zone_exhaust_fan = openstudio.model.FanZoneExhaust(model)
            zone_exhaust_fan.setName(f"{space_name} Exhaust Fan")
            zone_exhaust_fan.setAvailabilitySchedule(exhaust_schedule)
            zone_exhaust_fan.setFanEfficiency(space_type_data['exhaust_fan_efficiency'])
            zone_exhaust_fan.setPressureRise(space_type_data['exhaust_fan_pressure_rise'])
            zone_exhaust_fan.setMaximumFlowRate(max_flow_rate)
            if balanced_exhaust_schedule is not None:
                zone_exhaust_fan.setBalancedExhaustFractionSchedule(balanced_exhaust_schedule)
            zone_exhaust_fan.setEndUseSubcategory('Zone Exhaust Fans')
            zone_exhaust_fan.addToThermalZone(space.thermalZone().get())

            exhaust_fan_power = space_type_data['exhaust_fan_power']
            if exhaust_fan_power:
                _add_exhaust_fan_equipment(model, space, float(exhaust_fan_power), exhaust_schedule)

    kitchen = model.getSpaceByName(KITCHEN_SPACE_NAME)
    if kitchen.is_initialized() and kitchen.get().thermalZone().is_initialized():
        sizing_zone = kitchen.get().thermalZone().get().sizingZone()
        sizing_zone.setCoolingMinimumAirFlowFraction(KITCHEN_COOLING_MIN_AIR_FLOW_FRACTION)
    laundry = model.getSpaceByName(LAUNDRY_SPACE_NAME)
    if laundry.is_initialized() and laundry.get().thermalZone().is_initialized():
        sizing_zone = laundry.get().thermalZone().get().sizingZone()
        sizing_zone.setCoolingMinimumAirFlow(LAUNDRY_COOLING_MIN_AIR_FLOW)

    logger.info('Finished building type specific adjustments.')
    return True

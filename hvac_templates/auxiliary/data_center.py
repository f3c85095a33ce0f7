import openstudio

from hvac_templates.logging import ModuleLogger

logger = ModuleLogger.get_logger(__name__)


def add_data_center_load(
    model: openstudio.model.Model,
    space: openstudio.model.Space,
    dc_watts_per_area: float
) -> openstudio.model.ElectricEquipment:
    """Adds an always-on IT equipment load of `dc_watts_per_area` (W/m2) to
    `space`.
    """
    data_center_definition = openstudio.model.ElectricEquipmentDefinition(model)
    data_center_definition.setName('Data Center Load')
    data_center_definition.setWattsperSpaceFloorArea(dc_watts_per_area)

    data_center_equipment = openstudio.model.ElectricEquipment(data_center_definition)
    data_center_equipment.setName('Data Center Load')
    data_center_equipment.setSchedule(model.alwaysOnDiscreteSchedule())
    data_center_equipment.setSpace(space)

    logger.info(f"Added data center load of {dc_watts_per_area:g} W/m2 to {space.nameString()}.")
    return data_center_equipment

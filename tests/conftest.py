import pytest
import openstudio

from hvac_templates.core import ScheduleLibrary, CurveLibrary
from hvac_templates.standards import StandardsData


@pytest.fixture(autouse=True)
def reset_libraries():
    yield
    ScheduleLibrary.reset()
    CurveLibrary.reset()
    StandardsData.reset()


@pytest.fixture
def model():
    return openstudio.model.Model()


def _add_space(model, floor_size):
    if floor_size is None:
        return openstudio.model.Space(model)
    # clockwise seen from above, so the floor faces down
    floor_print = openstudio.Point3dVector()
    for x, y in ((0, 0), (0, floor_size), (floor_size, floor_size), (floor_size, 0)):
        floor_print.append(openstudio.Point3d(x, y, 0))
    return openstudio.model.Space.fromFloorPrint(floor_print, 3.0, model).get()


@pytest.fixture
def make_zone(model):
    """Returns a factory that adds a thermal zone with one space to the
    model. The space is called '<zone name> Space' unless `space_name` is
    given, and gets a floor of `floor_size` x `floor_size` m if
    `floor_size` is given.
    """
    def factory(name='Zone 1', standards_space_type=None, floor_size=None, space_name=None):
        space = _add_space(model, floor_size)
        space.setName(space_name or f"{name} Space")
        zone = openstudio.model.ThermalZone(model)
        zone.setName(name)
        space.setThermalZone(zone)
        if standards_space_type is not None:
            space_type = openstudio.model.SpaceType(model)
            space_type.setName(f"{name} {standards_space_type}")
            space_type.setStandardsSpaceType(standards_space_type)
            space.setSpaceType(space_type)
        return zone
    return factory

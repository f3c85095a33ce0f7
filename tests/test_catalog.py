import pytest

from hvac_templates.catalog import SYSTEM_BUILDERS, get_builder, add_system
from hvac_templates.plant_loops import add_hw_loop


class TestCatalog:

    def test_get_builder(self):
        assert get_builder('Hot Water Loop') is add_hw_loop

    def test_unknown_system(self):
        with pytest.raises(KeyError, match='No builder for system'):
            get_builder('Ground Source Loop')

    def test_add_system(self, model):
        loop = add_system(model, 'Hot Water Loop', boiler_fuel_type='NaturalGas')
        assert loop.nameString() == 'Hot Water Loop'
        assert len(model.getBoilerHotWaters()) == 1

    def test_add_zone_equipment(self, model, make_zone):
        heaters = add_system(
            model, 'High Temp Radiant', standard='90.1-2013', sys_name=None,
            thermal_zones=[make_zone('Warehouse')], heating_type='Gas', combustion_efficiency=0.8
        )
        assert len(heaters) == 1

    def test_builders_take_model_first(self):
        for builder in SYSTEM_BUILDERS.values():
            assert builder.__code__.co_varnames[0] == 'model'

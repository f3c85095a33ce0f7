import pint

UNITS = pint.UnitRegistry()
Quantity = UNITS.Quantity

unit_definitions = [
    'fraction = [] = frac',
    'percent = 1e-2 frac = % = pct',
    'parts_per_million = 1e-6 fraction = ppm',
    # OpenStudio's inH_{2}O is the conventional 1000 kg/m3 water column
    'inch_water_column = inch * g_0 * 1000 * kilogram / meter ** 3 = inWC'
]
for ud in unit_definitions:
    UNITS.define(ud)

pint.set_application_registry(UNITS)

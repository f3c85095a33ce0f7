from .ptac import add_ptac, add_pthp
from .unit_heater import add_unitheater
from .radiant import add_high_temp_radiant

from .vav import add_vav_reheat, add_vav_pfp_boxes, add_pvav
from .cav import add_cav
from .psz import add_psz_ac, add_data_center_hvac
from .split_ac import add_split_AC
from .doas import add_doas

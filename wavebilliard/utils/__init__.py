from .builders import (
    rectangle, ellipse, stadium, sinai, annulus, flat_interface, young_slits, polygon
)
from .utils import find_first_arrival, travel_time

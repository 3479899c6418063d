from .probes import Probe
from .sources import DropSource

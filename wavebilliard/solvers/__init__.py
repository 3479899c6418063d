from .wave import WaveStepper
from .schrodinger import SchrodingerStepper

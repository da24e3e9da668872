__version__ = "v1.0.0"


__all__ = ["__version__", "cli", "config", "constants", "coverage", "covergen", "mission_files", "models"]

from . import cli
from . import config
from . import constants
from . import coverage
from . import covergen
from . import mission_files
from . import models

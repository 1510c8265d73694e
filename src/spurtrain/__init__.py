from importlib.metadata import version, PackageNotFoundError
from spurtrain.defs import *
from spurtrain.exceptions import *
from spurtrain.function_generators import *
from spurtrain.curve import *
from spurtrain.spurtrain_base_classes import *
from spurtrain.gearteeth import *
from spurtrain.gearmath import *
from spurtrain.spurtrain_core import *
from spurtrain.geartrain import *

# spurtrain.spurtrain_build123d needs the OpenCascade runtime, import it explicitly


try:
    __version__ = version("spurtrain")
except PackageNotFoundError:
    __version__ = "unknown version"

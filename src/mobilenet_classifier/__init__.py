"""
MobileNet Classifier

Binding for a quantized MobileNetV1 image classifier run through the
LiteRT interpreter: fixed preprocessing, inference and labelled
postprocessing.
"""

__version__ = "0.1.0"

from .inference import *
from .labels import *
from .models import *
from .processing import *
from .utils import *

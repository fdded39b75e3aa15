"""
Inference module for MobileNet Classifier

Handles classification pipelines and postprocessing of results.
"""

from .pipelines import *
from .postprocessing import *

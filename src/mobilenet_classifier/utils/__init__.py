"""
Utilities module for MobileNet Classifier

Common utilities for configuration, logging, errors and helper functions.
"""

from .config import *
from .exceptions import *
from .helpers import *
from .logging import *

"""
One dimensional tensor networks
"""

from .exceptions import *
from .operations import *
from .mps import *
from .mpo import *
from .mpo_operator import *

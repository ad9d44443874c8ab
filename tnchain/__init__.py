#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Matrix product states, matrix product operators and canonical forms
for one dimensional spin chains
"""

__author__='Xianrui Yin'

import os

cpu_deploy = os.environ.get('TNCHAIN_NUM_THREADS', '4')

for _var in ["OMP_NUM_THREADS", "NUMEXPR_NUM_THREADS", "OPENBLAS_NUM_THREADS"]:
    os.environ.setdefault(_var, cpu_deploy)

from .networks import *
from .models import *

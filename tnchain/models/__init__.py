#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Spin chain Hamiltonians in matrix product operator form
"""

__author__='Xianrui Yin'

from .spin_chains import *

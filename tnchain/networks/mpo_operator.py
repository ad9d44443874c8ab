#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Matrix-free interface for applying a matrix product operator onto a full state vector.

    This class acts as an interface between matrix product operators and iterative
    solvers from scipy, so that the spectrum of a MPO can be checked for chains
    whose dense matrix would not fit into memory.
"""

__author__='Xianrui Yin'

import numpy as np
from pylops import LinearOperator
from pylops.utils.typing import NDArray

from .mpo import MPO

__all__ = ["MPOOperator"]

class MPOOperator(LinearOperator):
    r"""Apply a MPO to a state vector site by site

                k1        k2              kN
              __|__     __|__           __|__
        1 ----| W |-----| W |-- ... ----| W |---- 1
              ``|``     ``|``           ``|``
                k1*       k2*             kN*
              __|_________|_______________|__
              |             x               |
              ```````````````````````````````

    Parameters
    ----------
    O : MPO
        the operator, legs ordered as `i, k, j, k*`
    """

    def __init__(self, O: MPO) -> None:
        self.Ws = O.As
        self.Ws_hc = O.hc().As
        dtype = np.result_type(*self.Ws)
        dims = tuple(O.physical_dims)
        super().__init__(dtype=dtype, dims=dims, dimsd=dims)

    @staticmethod
    def _apply(Ws, x: NDArray) -> NDArray:
        # the open operator bond is kept as the leading axis of y
        y = x[None,...]
        for i, W in enumerate(Ws):
            y = np.tensordot(W, y, axes=([0,3],[0,1+i]))
            y = np.moveaxis(y, 0, 1+i)
        return y[0]

    def _matvec(self, x: NDArray, vectorize=True) -> NDArray:
        if vectorize:
            x = x.reshape(self.dims)
            return self._apply(self.Ws, x).ravel()
        else:
            return self._apply(self.Ws, x)

    def _rmatvec(self, x: NDArray) -> NDArray:
        x = x.reshape(self.dimsd)
        return self._apply(self.Ws_hc, x).ravel()

#!/usr/bin/env python3
# -*- coding: utf-8 -*-


__author__='Xianrui Yin'

import numpy as np

from .exceptions import DimensionMismatch
from .operations import check_bond_dims

__all__ = ['MPO']

class MPO(object):
    """class for matrix product operators

    Parameters
    ----------
    As : list
        a list of rank-4 tensors, each tensor has the following shape

        k |
    i---- A ----j
        k*|

    i (j) is the left (right) bond leg and k (k*) is the ket (bra) physical leg
    the legs are ordered as `i, k, j, k*`

    Attributes
    ----------
    As : list
        as described above
    """
    def __init__(self, As) -> None:
        self.As = list(As)
        self._N = len(self.As)
        self.__bot()

    @classmethod
    def gen_random_mpo(cls, N:int, m_max:int, phy_dims:list, hermitian=False):
        assert len(phy_dims) == N
        rng = np.random.default_rng()
        bond_dims = rng.integers(1, m_max, size=N+1)
        bond_dims[0] = bond_dims[-1] = 1
        As = []
        for i in range(N):
            size = (bond_dims[i],phy_dims[i],bond_dims[i+1],phy_dims[i])
            As.append(rng.random(size) + 1j*rng.random(size))
        if hermitian:
            As = [A + A.swapaxes(1,3).conj() for A in As]
        return cls(As)

    @property
    def bond_dims(self):
        return [A.shape[0] for A in self.As] + [self.As[-1].shape[2]]

    @property
    def physical_dims(self):
        return [A.shape[1] for A in self.As]

    def conj(self):
        """
        Complex conjugate of the MPO
        """
        return MPO([A.conj() for A in self.As])

    def hc(self):
        """
        Hermitian conjugate of the MPO
        """
        return MPO([A.swapaxes(1,3).conj() for A in self.As])

    def to_matrix(self):
        """
        convert the MPO into a dense matrix by contracting the operator bonds.
        The first site is the most significant factor, i.e. the result agrees
        with kron(O_0, kron(O_1, ...)) for a product operator.
        """
        full = self.As[0]
        for i in range(1,self._N):
            full = np.tensordot(full, self.As[i], axes=(2,0))
            # i, k1, k1*, k2, j, k2* -> i, k1, k2, j, k1*, k2*
            full = np.transpose(full, (0,1,3,4,2,5))
            di, dk1, dk2, dj, dl1, dl2 = full.shape
            full = np.reshape(full, (di, dk1*dk2, dj, dl1*dl2))
        return full[0,:,0,:]

    def __len__(self):
        return self._N

    def __getitem__(self, idx: int):
        return self.As[idx]

    def __iter__(self):
        return iter(self.As)

    def __bot(self):
        check_bond_dims(self.As, ndim=4)
        if self.As[0].shape[0] != 1 or self.As[-1].shape[2] != 1:
            raise DimensionMismatch(None,
                f'outer bonds must be trivial, got {self.As[0].shape[0]} and {self.As[-1].shape[2]}')
        for i, A in enumerate(self.As):
            if A.shape[1] != A.shape[3]:
                raise DimensionMismatch(i, f'physical legs of different sizes in shape {A.shape}')

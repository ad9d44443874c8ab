#!/usr/bin/env python3
# -*- coding: utf-8 -*-


__author__='Xianrui Yin'

import numpy as np
from numpy.linalg import svd

import logging

from .exceptions import DimensionMismatch
from .operations import check_bond_dims, orthonormalizer, svd_step_left, _pivot

__all__ = ['MPS', 'as_mps', 'inner', 'expectation']

class MPS(object):
    '''
    class for matrix product states

    Parameters
    ----------
    As: list of local rank-3 tensors, each tensor has the following shape
                k
                |
            i---A---j
        i (j) is the left (right) bond leg and k is the physical leg,
        the legs are ordered as `i, k, j`

    Attributes
    ----------
    N: number of sites
    As: list of local tensors

    Methods
    ----------
    orthonormalize()
    as_array()
    norm()
    entropy()
    conj()
    '''

    def __init__(self, As:list) -> None:
        self.As = list(As)
        self._N = len(self.As)
        self.__bot()

    @classmethod
    def gen_polarized_spin_chain(cls, N:int, polarization:str):
        if polarization not in ['+z','-z','+x']:
            raise ValueError('Only support polarization +z, -z or +x')
        A = np.zeros([1,2,1])
        if polarization == '+z':
            A[0,0,0] = 1.
        elif polarization == '-z':
            A[0,1,0] = 1.
        else:
            A[0,0,0] = A[0,1,0] = 0.5**0.5
        return cls([A.copy() for _ in range(N)])

    @classmethod
    def gen_random_state(cls, N:int, m_max:int, phy_dims:list, fixed=False):
        """random complex MPS, the inner bond dimensions are drawn from
        [1, m_max) or, if `fixed` is True, all equal to `m_max`"""
        assert len(phy_dims) == N
        rng = np.random.default_rng()
        if fixed:
            bond_dims = np.full(N+1, m_max)
        else:
            bond_dims = rng.integers(1, m_max, size=N+1)
        bond_dims[0] = bond_dims[-1] = 1
        As = []
        for i in range(N):
            size = (bond_dims[i],phy_dims[i],bond_dims[i+1])
            As.append((rng.normal(size=size) + 1j*rng.normal(size=size))/2**0.5)
        return cls(As)

    @classmethod
    def gen_aklt_state(cls, N:int):
        """
        a ground state of the open spin-1 AKLT chain, the local basis is
        ordered as m = +1, 0, -1. The edge spins are fixed by keeping the
        first row (column) of the leftmost (rightmost) bond matrices.
        """
        A = np.zeros([2,3,2])
        A[:,0,:] = np.sqrt(2/3) * np.array([[0., 1.], [0., 0.]])
        A[:,1,:] = -np.sqrt(1/3) * np.array([[1., 0.], [0., -1.]])
        A[:,2,:] = -np.sqrt(2/3) * np.array([[0., 0.], [1., 0.]])
        As = [A.copy() for _ in range(N)]
        As[0] = As[0][None,0,:,:]
        As[-1] = As[-1][:,:,0,None]
        return cls(As)

    def orthonormalize(self, mode:str, center_idx=None, normalize=True, tol=None, m_max=None):
        """return a new MPS in left, right or mixed canonical form,
        see operations.orthonormalizer()"""
        return MPS(orthonormalizer(self.As, mode, center_idx, normalize, tol, m_max))

    @property
    def physical_dims(self):
        return [A.shape[1] for A in self]

    @property
    def bond_dims(self):
        return [A.shape[0] for A in self] + [self[-1].shape[2]]

    def entropy(self, idx=None):
        """
        von Neumann entanglement entropy of the bipartitions of the chain.

        Parameters
        ----------
        idx : int or None
            if None, return the entropies of all N-1 bonds, otherwise only
            the one of the bond between site `idx` and `idx+1`
        """
        As = orthonormalizer(self.As, 'right')
        S = []
        for i in range(self._N - 1):
            As[i], As[i+1], s = svd_step_left(As[i], As[i+1])
            s = s[s>1.e-15]
            ss = s*s
            S.append(-np.sum(ss*np.log(ss)))
        S = np.array(S)
        if idx is None:
            return S
        return S[idx]

    def as_array(self):
        """
        convert a MPS into a state vector by iterative contractions
        """
        res = self[0]
        for A in self.As[1:]:
            res = np.tensordot(res, A, axes=(2,0))
            res = np.reshape(res, (1,-1,A.shape[2]))
        return res.ravel()

    def norm(self):
        return np.sqrt(abs(inner(self, self)))

    def conj(self):
        return MPS([A.conj() for A in self])

    def __len__(self):
        return self._N

    def __getitem__(self, idx: int):
        return self.As[idx]

    def __setitem__(self, idx: int, value):
        self.As[idx] = value

    def __iter__(self):
        return iter(self.As)

    def __bot(self):
        check_bond_dims(self.As, ndim=3)
        if self.As[0].shape[0] != 1 or self.As[-1].shape[2] != 1:
            raise DimensionMismatch(None,
                f'outer bonds must be trivial, got {self.As[0].shape[0]} and {self.As[-1].shape[2]}')

def as_mps(psi: np.ndarray, phy_dims:list, tol=None, m_max=None):
    """
    convert a state vector into a left canonical MPS by iterative SVDs,
    the norm of `psi` is carried by the last tensor
    """
    phy_dims = list(phy_dims)
    if psi.ndim != 1 or np.prod(phy_dims) != psi.shape[0]:
        raise DimensionMismatch(None,
            f'state vector of shape {psi.shape} does not fit physical dimensions {phy_dims}')
    As = []
    rest = np.reshape(psi, (1,-1))
    for d in phy_dims[:-1]:
        di = rest.shape[0]
        rest = np.reshape(rest, (di*d,-1))
        u, s, vh = svd(rest, full_matrices=False)
        pivot = _pivot(s, tol, m_max)
        As.append(np.reshape(u[:,:pivot], (di,d,pivot)))
        rest = s[:pivot,None] * vh[:pivot,:]
    As.append(np.reshape(rest, (-1,phy_dims[-1],1)))
    return MPS(As)

def inner(amps: MPS, bmps: MPS):
    """Evaluating the inner product of two MPSs by bubbling, complexity=O(D^3)

    Parameters
    ----------
    amps : MPS
        the bra MPS
    bmps : MPS
        the ket MPS

    Return
    ----------
    the inner product <amps|bmps>
    """
    if len(amps) != len(bmps):
        raise DimensionMismatch(None, f'chains of different lengths {len(amps)} and {len(bmps)}')
    res = np.ones((1,1))
    for i in range(len(amps)):
        res = np.tensordot(res, amps[i].conj(), axes=(0,0))
        try:
            res = np.tensordot(res, bmps[i], axes=([0,1],[0,1]))
        except ValueError as e:
            logging.error(f'i={i},shape b:{bmps[i].shape},shape a:{amps[i].shape}, shape res:{res.shape}')
            raise DimensionMismatch(i, str(e)) from e
    return res.item()

def expectation(psi: MPS, O):
    r"""Expectation value <psi|O|psi>/<psi|psi> of a MPO

    The left environment is grown site by site

    /```\----0      <bra|
    |   |
    | E |----1      O
    |   |
    \___/----2      |ket>

    Parameters
    ----------
    psi : MPS
    O : MPO
        legs of the local tensors are ordered as `i, k, j, k*`
    """
    if len(psi) != len(O):
        raise DimensionMismatch(None, f'MPS of length {len(psi)} and MPO of length {len(O)}')
    E = np.ones((1,1,1))
    for A, W in zip(psi, O):
        E = np.tensordot(E, A.conj(), axes=(0,0))
        E = np.tensordot(E, W, axes=([0,2],[0,1]))
        E = np.tensordot(E, A, axes=([0,3],[0,1]))
    return np.real_if_close(E.item() / inner(psi, psi))

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

__author__='Xianrui Yin'

import numpy as np
from scipy import sparse
from scipy.sparse.linalg import eigsh

import logging

from ..networks.exceptions import DimensionMismatch
from ..networks.mpo import MPO
from ..networks.mps import MPS, expectation
from ..networks.mpo_operator import MPOOperator

__all__ = ['spin_operators', 'SpinChain', 'XY', 'Heisenberg', 'AKLT']

def spin_operators(d:int):
    """
    spin-s matrices with s = (d-1)/2 in the basis m = s, s-1, ..., -s

    Return
    ----------
    splus, sminus, sz, sx, sy, sid
    """
    s = (d-1)/2
    m = s - np.arange(d)
    sz = np.diag(m)
    splus = np.diag(np.sqrt(s*(s+1) - m[1:]*(m[1:]+1)), k=1)
    sminus = splus.T.copy()
    sx = 0.5 * (splus + sminus)
    sy = -0.5j * (splus - sminus)
    return splus, sminus, sz, sx, sy, np.eye(d)

def _chain_mpo(O, N:int):
    """
    O is the bulk tensor in block-matrix layout, i.e. legs `i, j, k, k*`.
    The first (last) site keeps only the last row (first column).
    """
    O = np.transpose(O, (0,2,1,3))
    Os = [O] * N
    Os[0] = O[None,-1,:,:,:]
    Os[-1] = O[:,:,0,None,:]
    return MPO(Os)

class SpinChain(object):
    """
    Base class for spin chains with open boundaries

    Params:
        N: chain length
        d: local dimension, 2s+1 for spin s
    """

    def __init__(self, N:int, d:int=2) -> None:
        if N < 2:
            raise DimensionMismatch(None, f'a spin chain needs at least two sites, got N={N}')
        if d < 2:
            raise DimensionMismatch(None, f'the local dimension must be at least 2, got d={d}')
        self._N = N
        self.d = d
        self.splus, self.sminus, self.sz, self.sx, self.sy, self.sid = spin_operators(d)
        self.nu = np.zeros((d,d))

    @property
    def H_full(self):
        """brute-force Hamiltonian in the full Hilbert space, as a sparse matrix"""
        N, d = self._N, self.d
        hduo = self.hduo
        h_full = sparse.csr_matrix((d**N, d**N), dtype=np.result_type(*hduo))
        for i, hh in enumerate(hduo):
            h_full += sparse.kron(sparse.eye(d**i), sparse.kron(hh, sparse.eye(d**(N-2-i))))
        return h_full.tocsr()

    def _split_field(self, i:int, h:float):
        """share an on-site field between the two bonds of a site"""
        hL = hR = 0.5 * h
        if i == 0: # first bond
            hL = h
        if i + 1 == self._N - 1: # last bond
            hR = h
        return hL, hR

    def energy(self, psi:MPS):
        assert len(psi) == self._N
        return expectation(psi, self.mpo)

    def exact_energies(self, k:int=1):
        """lowest `k` eigenvalues of the MPO, computed matrix-free"""
        w = eigsh(MPOOperator(self.mpo), k=k, which='SA', return_eigenvectors=False)
        return np.sort(w)

    def mpo_error(self):
        """maximum absolute deviation between the MPO and the brute-force Hamiltonian"""
        return np.max(np.abs(self.mpo.to_matrix() - self.H_full.toarray()))

    def check_mpo(self, tol=1e-10):
        err = self.mpo_error()
        name = type(self).__name__
        if err > tol:
            logging.warning(f'{name}(N={self._N}): MPO deviates from the full Hamiltonian by {err:.3e} > {tol:.1e}')
        else:
            logging.info(f'{name}(N={self._N}): MPO agrees with the full Hamiltonian, deviation {err:.3e}')
        return err

    def __len__(self):
        return self._N

class XY(SpinChain):
    """
    Anisotropic XY chain in a transverse field.
    H = -J*sum{(1+gamma)*Sx*Sx + (1-gamma)*Sy*Sy} - h*sum{Sz}
    """

    def __init__(self, N:int, J=1., gamma=0., h=0., d:int=2):
        super().__init__(N, d)
        self.J, self.gamma, self.h = J, gamma, h

    @property
    def mpo(self):
        sp, sm, sz, nu, id = self.splus, self.sminus, self.sz, self.nu, self.sid
        J, gamma, h = self.J, self.gamma, self.h
        # (1+gamma)SxSx + (1-gamma)SySy = Sp(Sm + gamma*Sp)/2 + Sm(Sp + gamma*Sm)/2
        O = np.array([[id, nu, nu, nu],
                      [sm + gamma*sp, nu, nu, nu],
                      [sp + gamma*sm, nu, nu, nu],
                      [-h*sz, -0.5*J*sp, -0.5*J*sm, id]])
        return _chain_mpo(O, self._N)

    @property
    def hduo(self):
        sx, sy, sz, id = self.sx, self.sy, self.sz, self.sid
        J, gamma = self.J, self.gamma
        h_list = []
        for i in range(self._N - 1):
            hL, hR = self._split_field(i, self.h)
            hh = - J * (1+gamma) * np.kron(sx, sx) \
                 - J * (1-gamma) * np.kron(sy, sy) \
                 - hL * np.kron(sz, id) \
                 - hR * np.kron(id, sz)
            h_list.append(hh)
        return h_list

class Heisenberg(SpinChain):
    """Heisenberg chain in a Zeeman field, spin-1 by default
    H = J*sum{Sx*Sx + Sy*Sy + Sz*Sz} - h*sum{Sz}
    """
    def __init__(self, N:int, J=1., h=0., d:int=3):
        super().__init__(N, d)
        self.J = J
        self.h = h

    @property
    def mpo(self):
        sp, sm, sz, nu, id = self.splus, self.sminus, self.sz, self.nu, self.sid
        J, h = self.J, self.h
        O = np.array([[id, nu, nu, nu, nu],
                      [sm, nu, nu, nu, nu],
                      [sp, nu, nu, nu, nu],
                      [sz, nu, nu, nu, nu],
                      [-h*sz, 0.5*J*sp, 0.5*J*sm, J*sz, id]])
        return _chain_mpo(O, self._N)

    @property
    def hduo(self):
        sx, sy, sz, id = self.sx, self.sy, self.sz, self.sid
        J = self.J
        h_list = []
        for i in range(self._N - 1):
            hL, hR = self._split_field(i, self.h)
            hh = J * (np.kron(sx, sx) + np.kron(sy, sy) + np.kron(sz, sz)) \
                 - hL * np.kron(sz, id) \
                 - hR * np.kron(id, sz)
            h_list.append(hh)
        return h_list

class AKLT(SpinChain):
    """Affleck-Kennedy-Lieb-Tasaki spin-1 chain
    H = sum{S*S + (S*S)^2/3}
    The open chain has a four-fold degenerate ground state with energy -2(N-1)/3.
    """
    def __init__(self, N:int):
        super().__init__(N, d=3)

    @property
    def mpo(self):
        sp, sm, sz, id = self.splus, self.sminus, self.sz, self.sid
        # S*S = sum_a A[a] B[a]
        A = [sz, sp, sm]
        B = [sz, 0.5*sm, 0.5*sp]
        O = np.zeros((14, 14, 3, 3))
        O[0,0] = O[13,13] = id
        for a in range(3):
            O[13,1+a] = A[a]
            O[1+a,0] = B[a]
            for b in range(3):
                # (S*S)^2 = sum_ab (A[a]A[b]) (B[a]B[b])
                O[13,4+3*a+b] = A[a] @ A[b] / 3
                O[4+3*a+b,0] = B[a] @ B[b]
        return _chain_mpo(O, self._N)

    @property
    def hduo(self):
        sx, sy, sz = self.sx, self.sy, self.sz
        ss = np.kron(sx, sx) + np.kron(sy, sy) + np.kron(sz, sz)
        return [ss + ss @ ss / 3] * (self._N - 1)

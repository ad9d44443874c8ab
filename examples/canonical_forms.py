"""This module follows a random MPS through the left and right canonical forms
and shows how the bond dimensions shrink to the size of the Hilbert space to
either side of each bond.
"""

import numpy as np
import matplotlib.pyplot as plt

import logging
logging.basicConfig(level=logging.DEBUG)

from tnchain.networks.mps import MPS
from tnchain.networks.operations import left_normalize, right_normalize

def orthogonality_errors(As, mode):
    errs = []
    for A in As:
        di, dk, dj = A.shape
        if mode == 'left':
            A = A.reshape(di*dk, dj)
            errs.append(np.max(np.abs(A.conj().T @ A - np.eye(dj))))
        else:
            A = A.reshape(di, dk*dj)
            errs.append(np.max(np.abs(A @ A.conj().T - np.eye(di))))
    return errs

def CanonicalForms(N=12, D=20, d=2):

    psi = MPS.gen_random_state(N, D, [d]*N, fixed=True)
    print('initial bond dimensions:', psi.bond_dims)

    As = left_normalize(psi.As)
    print('after left sweep:       ', MPS(As).bond_dims)
    print('left orthogonality errors:', orthogonality_errors(As[:-1], 'left'))

    Bs = right_normalize(As)
    print('after right sweep:      ', MPS(Bs).bond_dims)
    print('right orthogonality errors:', orthogonality_errors(Bs[1:], 'right'))
    print('norm:', MPS(Bs).norm())

    S = MPS(Bs).entropy()

    fig, (ax1, ax2) = plt.subplots(ncols=2, figsize=(12,5))
    bonds = np.arange(N+1)
    ax1.plot(bonds, psi.bond_dims, '-o', label='random')
    ax1.plot(bonds, MPS(Bs).bond_dims, '-s', label='canonical')
    ax1.plot(bonds, [min(d**l, d**(N-l)) for l in bonds], 'k--', label=r'$\min(d^l, d^{N-l})$')
    ax1.set_xlabel('bond')
    ax1.set_ylabel('bond dimension')
    ax1.legend()

    ax2.plot(np.arange(1,N), S, '-o')
    ax2.set_xlabel('bond')
    ax2.set_ylabel('entanglement entropy')

    fig.tight_layout()
    plt.savefig('canonical_forms')

if __name__ == "__main__":

    CanonicalForms()

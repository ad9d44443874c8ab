import numpy as np
from numpy.linalg import norm, svd
from copy import deepcopy
import logging

from .exceptions import DimensionMismatch

__all__ = ['check_bond_dims', 'svd_step_left', 'svd_step_right', 'orthonormalizer',
           'left_normalize', 'right_normalize', 'mixed_normalize']


def check_bond_dims(As, ndim=3):
    """Check that a list of local tensors forms a chain.

    Both MPS tensors ``(i, k, j)`` and MPO tensors ``(i, k, j, k*)`` carry
    the left bond on axis 0 and the right bond on axis 2.

    Parameters
    ----------
    As : list
        local tensors ordered along the chain
    ndim : int
        expected rank of every tensor, 3 for MPS and 4 for MPO

    Raises
    ----------
    DimensionMismatch
        a tensor has the wrong rank or two neighboring bonds disagree
    ValueError
        empty chain or zero-sized leg
    """
    if len(As) == 0:
        raise ValueError('the chain must contain at least one tensor')
    for i, A in enumerate(As):
        if np.ndim(A) != ndim:
            raise DimensionMismatch(i, f'expected a rank-{ndim} tensor, got shape {np.shape(A)}')
        if 0 in np.shape(A):
            raise ValueError(f'site {i}: zero-sized leg in shape {np.shape(A)}')
    for i in range(len(As)-1):
        if As[i].shape[2] != As[i+1].shape[0]:
            raise DimensionMismatch(i,
                f'right bond dimension {As[i].shape[2]} does not match '
                f'left bond dimension {As[i+1].shape[0]} of site {i+1}')

def _pivot(s, tol, m_max):
    """number of singular values to keep"""
    pivot = len(s)
    if tol is not None and norm(s) > 0:
        s1 = s / norm(s)
        pivot = max(int(np.sum(s1 > tol)), 1)
    if m_max:
        pivot = min(pivot, m_max)
    return pivot

def svd_step_left(ls, rs, tol=None, m_max=None):
    r"""Move the norm one site to the right by a SVD.

    Given two neighboring MPS tensors as following,
          1,k         1,k
           |           |
        ---ls---    ---rs---
        0,i  2,j    0,i  2,j

    merge the legs i,k of ls, compute the thin SVD ls = U S Vh, keep U as
    the new (left orthonormal) ls and multiply S Vh into rs.

    Parameters
    ----------
    ls : ndarray, ndim==3
        local MPS tensor on the left, to be decomposed
    rs : ndarray, ndim==3
        local MPS tensor on the right
    tol : float or None
        singular values s with s/norm(s) <= tol are discarded
    m_max : int or None
        largest bond dimension allowed

    Return
    ----------
    ls_new : ndarray, ndim==3
        left orthonormal MPS tensor
    rs_new : ndarray, ndim==3
        new orthogonality center
    s : ndarray, ndim==1
        kept singular values in descending order
    """
    di, dk, dj = ls.shape
    u, s, vh = svd(ls.reshape(di*dk, dj), full_matrices=False)
    pivot = _pivot(s, tol, m_max)
    u, s, vh = u[:,:pivot], s[:pivot], vh[:pivot,:]
    ls_new = u.reshape(di, dk, pivot)
    rs_new = np.tensordot(s[:,None]*vh, rs, axes=(1,0))
    return ls_new, rs_new, s

def svd_step_right(ls, rs, tol=None, m_max=None):
    r"""Move the norm one site to the left by a SVD.

    Same geometry as in svd_step_left(). The legs k,j of rs are merged,
    Vh becomes the new (right orthonormal) rs and U S is multiplied into ls.

    Return
    ----------
    ls_new : ndarray, ndim==3
        new orthogonality center
    rs_new : ndarray, ndim==3
        right orthonormal MPS tensor
    s : ndarray, ndim==1
        kept singular values in descending order
    """
    di, dk, dj = rs.shape
    u, s, vh = svd(rs.reshape(di, dk*dj), full_matrices=False)
    pivot = _pivot(s, tol, m_max)
    u, s, vh = u[:,:pivot], s[:pivot], vh[:pivot,:]
    rs_new = vh.reshape(pivot, dk, dj)
    ls_new = np.tensordot(ls, u*s, axes=(2,0))
    return ls_new, rs_new, s

def orthonormalizer(As, mode:str, center_idx=None, normalize=True, tol=None, m_max=None):
    r"""
    Transform a chain of MPS tensors into a canonical form by successive SVDs.

    Parameters
    ----------
    As : list
        local rank-3 tensors with legs (left bond, physical, right bond)
    mode : str
        'left', 'right' or 'mixed'. When choosing 'mixed', the index of the
        orthogonality center must be given
    center_idx : int
        the index of the orthogonality center
    normalize : bool
        if True, the orthogonality center is rescaled so that the state has
        unit norm. Otherwise the center carries the norm of the input
    tol : float or None
        relative threshold for discarding singular values, None keeps the
        full thin-SVD rank
    m_max : int or None
        largest bond dimension allowed

    Return
    ----------
    Bs : list
        the canonical chain, a new list of new tensors. `As` is left untouched.

    Notes
    ----------
    Bond dimensions are only ever reduced: the bond between site l and l+1
    becomes min(Dl*d, Dr) of the running matrix. For trivial outer bonds and
    no truncation, a left sweep followed by a right sweep leaves every bond
    at most min(d^l, d^(N-l)).
    """
    check_bond_dims(As)
    N = len(As)
    if mode == 'left':
        center_idx = N-1
    elif mode == 'right':
        center_idx = 0
    elif mode == 'mixed':
        if center_idx is None or not 0 <= center_idx < N:
            raise ValueError(f'center_idx must be an integer in [0, {N}), got {center_idx}')
    else:
        raise ValueError(
            'Mode argument should be one of left, right or mixed')

    Bs = deepcopy(list(As))
    for i in range(center_idx):
        dj = Bs[i].shape[2]
        Bs[i], Bs[i+1], _ = svd_step_left(Bs[i], Bs[i+1], tol, m_max)
        logging.debug(f'left sweep, site {i}: bond dimension {dj} -> {Bs[i].shape[2]}')
    for i in range(N-1, center_idx, -1):
        di = Bs[i].shape[0]
        Bs[i-1], Bs[i], _ = svd_step_right(Bs[i-1], Bs[i], tol, m_max)
        logging.debug(f'right sweep, site {i}: bond dimension {di} -> {Bs[i].shape[0]}')
    if normalize:
        nrm = norm(Bs[center_idx])
        if nrm == 0:
            raise ValueError('the zero state cannot be normalized')
        Bs[center_idx] = Bs[center_idx] / nrm
    return Bs

def left_normalize(As, normalize=True, tol=None, m_max=None):
    """Left canonical form, every tensor but the last is left orthonormal.
    See orthonormalizer()"""
    return orthonormalizer(As, 'left', normalize=normalize, tol=tol, m_max=m_max)

def right_normalize(As, normalize=True, tol=None, m_max=None):
    """Right canonical form, every tensor but the first is right orthonormal.
    See orthonormalizer()"""
    return orthonormalizer(As, 'right', normalize=normalize, tol=tol, m_max=m_max)

def mixed_normalize(As, center_idx:int, normalize=True, tol=None, m_max=None):
    """Mixed canonical form with the orthogonality center at `center_idx`.
    See orthonormalizer()"""
    return orthonormalizer(As, 'mixed', center_idx, normalize, tol, m_max)

import numpy as np

import unittest

from tnchain.networks.mps import *
from tnchain.networks.exceptions import DimensionMismatch
from tnchain.models.spin_chains import AKLT

class TestMPS(unittest.TestCase):

    def test_orthonormalize(self):
        psi = self.psi
        cache = psi.as_array()
        phi = psi.orthonormalize('left')
        self.assertIsInstance(phi, MPS)
        for A in phi[:-1]:
            s = A.shape
            A = np.reshape(A, (s[0]*s[1], s[2]))
            self.assertTrue(np.allclose(A.conj().T @ A, np.eye(s[2])))
        phi = phi.orthonormalize('right')
        for A in phi[1:]:
            s = A.shape
            A = np.reshape(A, (s[0], s[1]*s[2]))
            self.assertTrue(np.allclose(A @ A.T.conj(), np.eye(s[0])))
        self.assertAlmostEqual(phi.norm(), 1.)
        # the original MPS is not modified
        self.assertTrue(np.array_equal(psi.as_array(), cache))

    def test_inner(self):
        psi = self.psi.orthonormalize('right')
        phi = self.phi.orthonormalize('left')
        res1 = inner(psi, phi)
        res2 = np.vdot(psi.as_array(), phi.as_array())
        self.assertAlmostEqual(res1, res2, 12)
        self.assertTrue(np.isclose(self.psi.norm(), np.linalg.norm(self.psi.as_array()), rtol=1e-10))

    def test_as_mps(self):
        rng = np.random.default_rng()
        N = rng.integers(3,7)
        phy_dims = rng.integers(2,4,size=N)
        vec = rng.normal(size=np.prod(phy_dims))
        psi = as_mps(vec, phy_dims)
        self.assertEqual(psi.physical_dims, list(phy_dims))
        self.assertTrue(np.allclose(psi.as_array(), vec))
        for l, D in enumerate(psi.bond_dims):
            self.assertLessEqual(D, min(np.prod(phy_dims[:l]), np.prod(phy_dims[l:])))
        with self.assertRaises(DimensionMismatch):
            as_mps(vec[:-1], phy_dims)

    def test_entropy(self):
        psi = self.psi
        vec = psi.as_array()
        vec = vec / np.linalg.norm(vec)
        dims = psi.physical_dims
        S = psi.entropy()
        self.assertEqual(len(S), len(psi)-1)
        idx = len(psi) // 2
        s = np.linalg.svd(np.reshape(vec, (np.prod(dims[:idx+1]), -1)), compute_uv=False)
        s = s[s>1e-15]
        self.assertAlmostEqual(S[idx], -np.sum(s**2*np.log(s**2)))
        self.assertAlmostEqual(psi.entropy(idx), S[idx])
        up = MPS.gen_polarized_spin_chain(5, '+x')
        self.assertTrue(np.allclose(up.entropy(), 0.))

    def test_polarized(self):
        up = MPS.gen_polarized_spin_chain(3, '+z')
        vec = np.zeros(8)
        vec[0] = 1.
        self.assertTrue(np.allclose(up.as_array(), vec))
        down = MPS.gen_polarized_spin_chain(3, '-z')
        vec = np.zeros(8)
        vec[-1] = 1.
        self.assertTrue(np.allclose(down.as_array(), vec))
        with self.assertRaises(ValueError):
            MPS.gen_polarized_spin_chain(3, '+y')

    def test_aklt_state(self):
        N = 6
        psi = MPS.gen_aklt_state(N)
        self.assertEqual(psi.bond_dims, [1] + [2]*(N-1) + [1])
        model = AKLT(N)
        self.assertAlmostEqual(np.real(expectation(psi, model.mpo)).item(), -2*(N-1)/3)
        vec = psi.as_array()
        E = np.vdot(vec, model.H_full @ vec) / np.vdot(vec, vec)
        self.assertAlmostEqual(E.real, -2*(N-1)/3)

    def test_expectation(self):
        N = 4
        psi = MPS.gen_random_state(N, 5, [3]*N)
        model = AKLT(N)
        vec = psi.as_array()
        E = np.vdot(vec, model.H_full @ vec) / np.vdot(vec, vec)
        self.assertAlmostEqual(np.real(expectation(psi, model.mpo)).item(), E.real)

    def test_bot(self):
        rng = np.random.default_rng()
        with self.assertRaises(DimensionMismatch):
            MPS([rng.normal(size=(2,2,1))])
        with self.assertRaises(DimensionMismatch):
            MPS([rng.normal(size=(1,2,2)), rng.normal(size=(3,2,1))])
        with self.assertRaises(DimensionMismatch):
            inner(self.psi, MPS.gen_random_state(3, 4, [2]*3))

    def setUp(self) -> None:
        rng = np.random.default_rng()
        N = rng.integers(5,10)
        m_max = rng.integers(11,19)
        phy_dims = rng.integers(2,5,size=N)
        self.psi = MPS.gen_random_state(N, m_max, phy_dims)
        self.phi = MPS.gen_random_state(N, m_max, phy_dims)

if __name__ == '__main__':
    unittest.main()

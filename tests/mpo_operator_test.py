import numpy as np

import unittest

from tnchain.networks.mpo import MPO
from tnchain.networks.mpo_operator import MPOOperator
from tnchain.models.spin_chains import XY

class TestMPOOperator(unittest.TestCase):

    def test_matvec(self):
        W = self.randomMPO
        Op = MPOOperator(W)
        D = np.prod(W.physical_dims)
        self.assertEqual(Op.shape, (D, D))
        rng = np.random.default_rng()
        x = rng.normal(size=D) + 1j*rng.normal(size=D)
        self.assertTrue(np.allclose(Op.matvec(x), W.to_matrix() @ x))
        self.assertTrue(np.allclose(Op.rmatvec(x), W.to_matrix().T.conj() @ x))

    def test_unvectorized(self):
        W = self.randomMPO
        Op = MPOOperator(W)
        rng = np.random.default_rng()
        x = rng.normal(size=W.physical_dims)
        y = Op._matvec(x, vectorize=False)
        self.assertEqual(y.shape, tuple(W.physical_dims))
        self.assertTrue(np.allclose(y.ravel(), W.to_matrix() @ x.ravel()))

    def test_model(self):
        model = XY(6, J=1., gamma=0.3, h=0.7)
        Op = MPOOperator(model.mpo)
        H = model.H_full
        rng = np.random.default_rng()
        x = rng.normal(size=2**6)
        self.assertTrue(np.allclose(Op.matvec(x), H @ x))

    def setUp(self) -> None:
        rng = np.random.default_rng()
        N = rng.integers(3,6)
        m_max = rng.integers(3,6)
        phy_dims = rng.integers(2, 4, size=N)
        self.randomMPO = MPO.gen_random_mpo(N, m_max, phy_dims)

if __name__ == '__main__':
    unittest.main()

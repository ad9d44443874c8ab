import numpy as np

import unittest

from tnchain.networks.mpo import *
from tnchain.networks.exceptions import DimensionMismatch

class TestMPO(unittest.TestCase):

    def test_to_matrix(self):
        W = self.randomMPO
        self.assertEqual(W.to_matrix().shape, (np.prod(W.physical_dims),)*2)

    def test_product_operator(self):
        rng = np.random.default_rng()
        ops = [rng.normal(size=(d,d)) for d in [2,3,2]]
        W = MPO([op[None,:,None,:] for op in ops])
        self.assertEqual(W.bond_dims, [1,1,1,1])
        self.assertTrue(np.allclose(W.to_matrix(), np.kron(ops[0], np.kron(ops[1], ops[2]))))

    def test_hc(self):
        W = self.randomMPO
        self.assertTrue(np.allclose(W.to_matrix().T.conj(), W.hc().to_matrix()))
        self.assertTrue(np.allclose(W.to_matrix().conj(), W.conj().to_matrix()))

    def test_hermitian(self):
        rng = np.random.default_rng()
        W = MPO.gen_random_mpo(3, 4, rng.integers(2,4,size=3), hermitian=True)
        self.assertTrue(np.allclose(W.to_matrix(), W.to_matrix().T.conj()))

    def test_bot(self):
        rng = np.random.default_rng()
        with self.assertRaises(DimensionMismatch):
            MPO([rng.normal(size=(1,2,3,2)), rng.normal(size=(2,2,1,2))])
        with self.assertRaises(DimensionMismatch):
            MPO([rng.normal(size=(1,2,1,3))])
        with self.assertRaises(DimensionMismatch):
            MPO([rng.normal(size=(1,2,1))])

    def setUp(self) -> None:
        rng = np.random.default_rng()
        N = rng.integers(5,8)
        m_max = rng.integers(3,6)
        phy_dims = rng.integers(2, 4, size=N)
        self.randomMPO = MPO.gen_random_mpo(N, m_max, phy_dims)

if __name__ == '__main__':
    unittest.main()

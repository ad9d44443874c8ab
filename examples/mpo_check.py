"""Cross-check the MPOs of the spin chain models against the brute-force
Hamiltonians for short chains.
"""

import numpy as np

import logging
logging.basicConfig(level=logging.INFO)

from tnchain.networks.mps import MPS
from tnchain.models.spin_chains import XY, Heisenberg, AKLT

if __name__ == "__main__":

    N = 5
    rng = np.random.default_rng()
    J, h = rng.normal(size=2)

    for model in [XY(N), XY(N, J=J, gamma=0.5, h=h), Heisenberg(N, J=J, h=h), AKLT(N)]:
        err = model.check_mpo(tol=1e-12)
        print(type(model).__name__, 'operator bond dimensions:', model.mpo.bond_dims, 'deviation:', err)

    model = AKLT(N)
    psi = MPS.gen_aklt_state(N)
    print('<AKLT|H|AKLT> =', model.energy(psi))
    print('analytical result =', -2*(N-1)/3)
    print('lowest eigenvalue of the MPO =', model.exact_energies()[0])

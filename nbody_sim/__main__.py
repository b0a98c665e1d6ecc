"""Allow ``python -m nbody_sim COUNT``."""

import sys
from nbody_sim.cli.main import main

sys.exit(main())

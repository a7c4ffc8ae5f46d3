import sys

from contract_deployer.cli import main

sys.exit(main())

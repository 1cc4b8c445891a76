import sys

from vaultdb.cli import main

sys.exit(main())

import sys

from storeenv.cli import main

sys.exit(main())

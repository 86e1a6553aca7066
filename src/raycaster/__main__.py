import sys

from raycaster.cli import main

sys.exit(main())

import sys

from runtime_stager.cli import main

sys.exit(main())

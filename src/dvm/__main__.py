import sys

from dvm.cli import main

sys.exit(main())

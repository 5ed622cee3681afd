import sys

from matheval.cli import main

sys.exit(main())

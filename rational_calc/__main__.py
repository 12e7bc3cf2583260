import sys

from .Console import main

sys.exit(main())

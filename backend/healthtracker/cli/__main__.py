"""python -m healthtracker.cli"""

import sys

from healthtracker.cli.main import main

sys.exit(main())

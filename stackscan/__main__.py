import sys

from stackscan.cli import main

sys.exit(main())

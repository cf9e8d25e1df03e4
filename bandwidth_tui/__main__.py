import sys

from bandwidth_tui.main import main

sys.exit(main())

import sys

from gh_notify.main import main

sys.exit(main())

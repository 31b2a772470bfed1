import sys

from bandtrace.cli import main

sys.exit(main())

import sys

from ccprobe.cli import main


sys.exit(main())

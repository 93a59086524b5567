import sys

from overlay_opcodes.cli import main

sys.exit(main())

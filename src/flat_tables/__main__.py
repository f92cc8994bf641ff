import sys

from flat_tables.cli import main

sys.exit(main())

import sys

from scrapeyourcity.cli import main

sys.exit(main())

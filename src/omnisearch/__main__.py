import sys

from omnisearch.cli import main

sys.exit(main())

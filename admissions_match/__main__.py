import sys

from admissions_match.cli import main

sys.exit(main())

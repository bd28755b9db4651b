"""Entry point: python -m sqlite_eval {query,info,serve} ..."""

import sys

from sqlite_eval.cli import main

sys.exit(main())

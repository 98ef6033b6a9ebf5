import sys

from envscope.cli import main

sys.exit(main())

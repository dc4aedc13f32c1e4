import sys

from attractorscope.cli import main

sys.exit(main())

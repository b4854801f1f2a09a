import sys

from cherrydb.cli import main

sys.exit(main())

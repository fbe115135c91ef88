import sys

from treecomplete.cli import app

sys.exit(app())

import sys

from maskblur.controllers.cli import main

sys.exit(main())

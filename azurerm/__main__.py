import sys

from azurerm.main import main

sys.exit(main())

import sys

from secret_recon.cli import main

sys.exit(main())

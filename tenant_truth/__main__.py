import sys

from tenant_truth.cli import main

sys.exit(main())

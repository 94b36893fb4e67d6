import sys

from file_storage.cli import main

sys.exit(main())

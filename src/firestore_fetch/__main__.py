import sys

from firestore_fetch.cli import main

sys.exit(main())

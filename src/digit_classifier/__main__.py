import sys

from digit_classifier.cli import main

sys.exit(main())

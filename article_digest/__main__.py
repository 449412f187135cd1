import sys

from article_digest.cli import main

sys.exit(main())

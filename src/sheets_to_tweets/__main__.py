import sys

from sheets_to_tweets.cli import main

sys.exit(main())

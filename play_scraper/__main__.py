import sys

from play_scraper.infrastructure.cli.scraper_cli import main

sys.exit(main())

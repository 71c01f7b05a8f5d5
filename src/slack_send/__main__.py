import sys

from slack_send.main import main

sys.exit(main())

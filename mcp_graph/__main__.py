import sys

from .mcp_server.run import main

sys.exit(main())

from __future__ import annotations

import sys

from chainlog.main import main

sys.exit(main())

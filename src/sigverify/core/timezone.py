"""UTC timezone enforcement.

Sets TZ=UTC so timestamps in logs and error envelopes are consistent
across environments.
"""

import os

os.environ["TZ"] = "UTC"

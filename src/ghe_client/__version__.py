"""Version information for ghe-client.

Single source of truth for version number.
Follows PEP 440 and semantic versioning principles.
"""

__version__ = "0.4.0"
__version_info__ = tuple(int(part) for part in __version__.split("."))

# Version history:
# 0.4.0 - Pre-receive environment downloads, opt-in retry wrapper
# 0.3.0 - Bounded memoization cache, Prometheus metrics
# 0.2.0 - Typed error taxonomy, Link header pagination
# 0.1.0 - Initial release (pre-receive hooks admin API)

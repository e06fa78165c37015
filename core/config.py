# =============================================================================
# core/config.py  —  Glean Connection Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the two values the server needs to talk to Glean:
#     GLEAN_API_KEY  → bearer token sent on every request
#     GLEAN_DOMAIN   → tenant name, used to build https://{domain}-be.glean.com
#
#   main.py calls load_dotenv() first, so both can live in a .env file.
#
# LIFECYCLE:
#   load_config() runs ONCE at startup.  The resulting GleanConfig is frozen
#   and handed to the HTTP client and the dispatch handler explicitly.
#   Nothing else in the codebase reads os.environ.
# =============================================================================

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

API_KEY_ENV = "GLEAN_API_KEY"
DOMAIN_ENV = "GLEAN_DOMAIN"


class ConfigError(ValueError):
    """Required Glean settings are missing from the environment."""


@dataclass(frozen=True)
class GleanConfig:
    # repr=False keeps the token out of logs and tracebacks
    api_key: str = field(repr=False)
    domain: str

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}-be.glean.com/rest/api/v1"


def load_config(environ: Optional[Mapping[str, str]] = None) -> GleanConfig:
    """Build a GleanConfig from environment variables.

    Fails fast: if either variable is missing or empty, raises ConfigError
    naming all of the missing ones, instead of letting the first request
    go out with "Bearer None".
    """
    env = os.environ if environ is None else environ

    api_key = (env.get(API_KEY_ENV) or "").strip()
    domain = (env.get(DOMAIN_ENV) or "").strip()

    missing = [name for name, value in ((API_KEY_ENV, api_key), (DOMAIN_ENV, domain)) if not value]
    if missing:
        raise ConfigError(f"Missing required environment variable(s): {', '.join(missing)}")

    return GleanConfig(api_key=api_key, domain=domain)

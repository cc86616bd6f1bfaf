"""Budget source factory functions."""

import os
from typing import Optional

from nabreport.domain.errors import ConfigError
from nabreport.sources.ynab import YnabClient


def create_ynab_source(token: Optional[str] = None) -> YnabClient:
    """Create a YNAB API source.

    Args:
        token: Personal access token. If None, checks the NABREPORT_TOKEN
            environment variable

    Returns:
        YnabClient instance

    Raises:
        ConfigError: If no token is available
    """
    if not token:
        token = os.environ.get("NABREPORT_TOKEN")

    if not token:
        raise ConfigError(
            "No personal access token configured "
            "(set personalAccessToken or NABREPORT_TOKEN)"
        )

    return YnabClient(token)

"""
LinkedIn Ads module.
Retrying HTTP transport, query builders and repositories for the LinkedIn
Marketing API (ad accounts, campaigns, ad analytics).
"""

from linkedin_ads.core.config import AppConfig, ConfigurationManager, HTTPConfig, LinkedInConfig
from linkedin_ads.factory import Repositories, build_repositories

__version__ = "1.0.0"

__all__ = [
    "AppConfig",
    "ConfigurationManager",
    "HTTPConfig",
    "LinkedInConfig",
    "Repositories",
    "build_repositories",
    "__version__",
]

"""
Risk engine configuration.

Upstream endpoints, timeouts, cache window and worker pool sizes.
Every value can be overridden through the environment.
"""

import os

# Upstream data providers
API_CONFIG = {
    "defillama_url": os.getenv("DEFILLAMA_API_URL", "https://api.llama.fi"),
    "coingecko_url": os.getenv("COINGECKO_API_URL", "https://api.coingecko.com/api/v3"),
    "coingecko_api_key": os.getenv("COINGECKO_API_KEY"),
}

# Applied to every upstream call; expiry is treated as a fetch failure
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", 10))

CACHE_CONFIG = {
    "freshness_seconds": float(os.getenv("CACHE_FRESHNESS_SECONDS", 300)),  # 5 minutes
}

ENGINE_CONFIG = {
    "fetch_workers": int(os.getenv("RISK_FETCH_WORKERS", 3)),   # tvl, market, usage
    "batch_workers": int(os.getenv("RISK_BATCH_WORKERS", 4)),   # concurrent reports
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
